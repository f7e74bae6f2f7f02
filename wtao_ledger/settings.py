"""Django settings for the WTAO wrapped-asset ledger.


This project hosts a single wrapped token:
- Native TAO paid in (native_stub) → WTAO credited 1:1 on the ledger (core)
- WTAO withdrawn → native TAO sent back from the ledger's reserve address


Callers are identified by the X-Caller header; the ledger does no authentication.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-insecure-key")
DEBUG = os.getenv("DEBUG", "1") in ("1", "true", "True", "yes")
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "*").split(",")
CSRF_TRUSTED_ORIGINS = os.getenv("CSRF_TRUSTED_ORIGINS", "").split(",") if os.getenv("CSRF_TRUSTED_ORIGINS") else []

def env_list(name, default=""):
    v = os.getenv(name, default)
    return [item.strip() for item in v.split(",") if item.strip()]

#######################
# Token metadata. Fixed when the token row is created; never mutated afterwards.
WTAO_NAME = os.getenv("WTAO_NAME", "Wrapped TAO")
WTAO_SYMBOL = os.getenv("WTAO_SYMBOL", "WTAO")
WTAO_DECIMALS = int(os.getenv("WTAO_DECIMALS", "18"))

# Native address of the ledger itself; deposits land here and withdrawals are paid from here.
WTAO_CONTRACT_ADDRESS = os.getenv("WTAO_CONTRACT_ADDRESS", "0xwtao000000000000000000000000000000000000")

# Demo seeding: accounts funded with native TAO by /api/demo/seed
DEMO_ACCOUNTS = env_list(
    "DEMO_ACCOUNTS",
    "0xa11ce00000000000000000000000000000000000,0xb0b0000000000000000000000000000000000000",
)
DEMO_FAUCET_TAO = os.getenv("DEMO_FAUCET_TAO", "10000")
#######################


INSTALLED_APPS = [
	"django.contrib.contenttypes",
	"django.contrib.auth",
	"django.contrib.sessions",
	"django.contrib.messages",
	"django.contrib.staticfiles",
	# local apps
	"core",
	"api",
	"native_stub",
]


MIDDLEWARE = [
	"django.middleware.security.SecurityMiddleware",
	"django.contrib.sessions.middleware.SessionMiddleware",
	"django.middleware.common.CommonMiddleware",
	"django.middleware.csrf.CsrfViewMiddleware",
	"django.contrib.auth.middleware.AuthenticationMiddleware",
	"django.contrib.messages.middleware.MessageMiddleware",
]


ROOT_URLCONF = "wtao_ledger.urls"
TEMPLATES = [
	{
		"BACKEND": "django.template.backends.django.DjangoTemplates",
		"DIRS": [],
		"APP_DIRS": True,
		"OPTIONS": {
			"context_processors": [
				"django.template.context_processors.debug",
				"django.template.context_processors.request",
				"django.contrib.auth.context_processors.auth",
				"django.contrib.messages.context_processors.messages",
			],
		},
	},
]


WSGI_APPLICATION = "wtao_ledger.wsgi.application"


DB_ENGINE = os.getenv("DB_ENGINE", "sqlite")
if DB_ENGINE == "postgres":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("POSTGRES_DB", "wtao"),
            "USER": os.getenv("POSTGRES_USER", "wtao"),
            "PASSWORD": os.getenv("POSTGRES_PASSWORD", "wtao"),
            "HOST": os.getenv("POSTGRES_HOST", "localhost"),
            "PORT": os.getenv("POSTGRES_PORT", "5432"),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOGGING = {
	"version": 1,
	"disable_existing_loggers": False,
	"formatters": {
		"verbose": {
			"format": "%(asctime)s %(levelname)s %(name)s %(message)s",
		},
	},
	"handlers": {
		"console": {
			"class": "logging.StreamHandler",
			"formatter": "verbose",
		},
	},
	"loggers": {
		"core": {"level": LOG_LEVEL},
		"api": {"level": LOG_LEVEL},
		"native_stub": {"level": LOG_LEVEL},
	},
	"root": {"handlers": ["console"], "level": "WARNING"},
}


AUTH_PASSWORD_VALIDATORS = []


LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True


STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
