"""
Django settings for the bakery backend.

One module for every environment; the DJANGO_ENV profile shim at the bottom
switches between local, staging and production behaviour.
"""

import os
from datetime import time
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured
from celery.schedules import crontab

LOG_JSON = os.getenv("LOG_JSON", "1") == "1"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# this file lives at backend/bakery/settings.py; BASE_DIR is /backend
BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-unsafe")
DEBUG = os.getenv("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]
CSRF_TRUSTED_ORIGINS = [o.strip() for o in os.getenv("CSRF_TRUSTED_ORIGINS", "").split(",") if o.strip()]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # project apps
    "common",
    "accounts",
    "locations",
    "orders",
    "dashboard",
    "audit",
    "ops",               # observability
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "ops.middleware.RequestLogMiddleware",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",   # admin needs this
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

ROOT_URLCONF = "bakery.urls"
WSGI_APPLICATION = "bakery.wsgi.application"
ASGI_APPLICATION = "bakery.asgi.application"

# sqlite needs no driver; staging and production set DB_ENGINE=mysql and install the mysql extra
DB_ENGINE = os.getenv("DB_ENGINE", "sqlite")

if DB_ENGINE == "sqlite":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": os.getenv("SQLITE_PATH", str(BASE_DIR / "db.sqlite3")),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.mysql",
            "NAME": os.getenv("MYSQL_DATABASE", "bakery"),
            "USER": os.getenv("MYSQL_USER", "bakery"),
            "PASSWORD": os.getenv("MYSQL_PASSWORD", "bakery"),
            "HOST": os.getenv("DB_HOST", "127.0.0.1"),
            "PORT": int(os.getenv("DB_PORT", "3306")),
            "OPTIONS": {
                "charset": "utf8mb4",
                "use_unicode": True,
            },
        }
    }

AUTH_USER_MODEL = "accounts.User"
AUTHENTICATION_BACKENDS = ["django.contrib.auth.backends.ModelBackend"]
LOGIN_URL = "accounts:login"
LOGIN_REDIRECT_URL = "orders:storefront"
LOGOUT_REDIRECT_URL = "accounts:login"

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# --- Bakery ---
# Page size of the storefront order list and the admin CRUD grids.
BAKERY_ORDERS_PAGE_SIZE = int(os.getenv("BAKERY_ORDERS_PAGE_SIZE", "50"))
# Due time preset on every new order ("HH:MM").
_due_time = os.getenv("BAKERY_DEFAULT_DUE_TIME", "16:00")
try:
    BAKERY_DEFAULT_DUE_TIME = time.fromisoformat(_due_time)
except ValueError as e:
    raise ImproperlyConfigured(f"BAKERY_DEFAULT_DUE_TIME must be HH:MM, got {_due_time!r}") from e

# Admin URL (harden in staging/prod)
ADMIN_URL = os.getenv("ADMIN_URL", "admin")

CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/1")
CELERY_TIMEZONE = TIME_ZONE

CELERY_BEAT_SCHEDULE = {
    "ops-beat-heartbeat-every-1m": {
        "task": "ops.tasks.beat_heartbeat",
        "schedule": crontab(minute="*/1"),
    },
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {"()": "ops.log_format.JsonFormatter"},
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json" if LOG_JSON else "plain",
        },
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        # one JSON line per request from ops.middleware
        "request": {"handlers": ["console"], "level": "INFO", "propagate": False},
    },
}

# ------------------------------------------------------------------------------
# Environment profile
# ------------------------------------------------------------------------------
# Prefer DJANGO_ENV; if not set, fall back to the *suffix* of DJANGO_SETTINGS_MODULE
# (e.g. ".local", ".staging", ".production").
DJANGO_ENV = os.getenv("DJANGO_ENV")
if not DJANGO_ENV:
    _dsm = os.getenv("DJANGO_SETTINGS_MODULE", "")
    if _dsm.endswith(".staging"):
        DJANGO_ENV = "staging"
    elif _dsm.endswith(".production"):
        DJANGO_ENV = "production"
    else:
        DJANGO_ENV = "local"  # safe default for development

DJANGO_ENV = DJANGO_ENV.lower()

if DJANGO_ENV == "local":
    DEBUG = True
elif DJANGO_ENV in {"staging", "production"}:
    DEBUG = False
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_SSL_REDIRECT = True
    SECURE_HSTS_SECONDS = 3600
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True
# ------------------------------------------------------------------------------
