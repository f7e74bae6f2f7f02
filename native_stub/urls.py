from django.urls import path
from .views import balance, transfers


urlpatterns = [
	path("balance/<str:address>", balance),
	path("transfers", transfers),
]
