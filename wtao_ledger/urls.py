"""URL routing for the ledger API + the local native-chain stub.


The /api/ namespace exposes ledger operations and reads; /stub/native/ exposes the
deterministic native-asset stub used by the adapter. In production, the stub is
replaced by the real chain.
"""

from django.urls import path, include


urlpatterns = [
	path("api/", include("api.urls")),
	path("stub/native/", include("native_stub.urls")),
]
