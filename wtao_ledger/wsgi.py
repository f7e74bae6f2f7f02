"""WSGI entry point for the ledger service."""

import os

from django.core.wsgi import get_wsgi_application


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "wtao_ledger.settings")

application = get_wsgi_application()
