"""
Wegesa – Django Settings (Infrastructure Only)
===============================================
Django serves as the HTTP container for the Wegesa JSON API.
The engines hold all state in memory; no database is configured.

Every deploy-time value comes from a WEGESA_* environment variable.
"""

import os
from pathlib import Path


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("WEGESA_SECRET_KEY", "wegesa-dev-key-replace-before-deployment")

DEBUG = _env_flag("WEGESA_DEBUG", default=False)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("WEGESA_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
# State lives in the in-process AppStore.
DATABASES = {}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Application ───────────────────────────────────────────────
# Read by core.config.AppSettings.from_mapping in the adapter wiring.
WEGESA = {
    "INVOICE_PREFIX": os.environ.get("WEGESA_INVOICE_PREFIX", "WGS"),
    "CURRENCY": os.environ.get("WEGESA_CURRENCY", "TZS"),
    "DEFAULT_TAX_RATE": os.environ.get("WEGESA_DEFAULT_TAX_RATE", "18"),
    "SEED_DEMO_DATA": _env_flag("WEGESA_SEED_DEMO_DATA", default=False),
}

# ── Logging ───────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("WEGESA_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "wegesa": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": True,
        },
    },
}
