"""Django settings for the order placement service.

Values are read from environment variables so the same image runs in
development, tests and containers. There is no database: orders, stock
levels and published events live in process memory.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_stock(name: str, default: str) -> dict[str, int]:
    """Parse ``SKU=N,SKU=N`` into a dict. Blank entries are skipped."""
    levels: dict[str, int] = {}
    for entry in os.getenv(name, default).split(","):
        if not entry.strip():
            continue
        sku, _, qty = entry.partition("=")
        levels[sku.strip()] = int(qty)
    return levels


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-insecure-order-placement-key")
DEBUG = _env_bool("DJANGO_DEBUG")
ALLOWED_HOSTS = [h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "apps.orders",
]

MIDDLEWARE = [
    "gateway.middleware.RequestIdMiddleware",
    "gateway.middleware.ApiSizeLimitMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "orderplacement.urls"
WSGI_APPLICATION = "orderplacement.wsgi.application"

# No database: persistence is the in-memory repository.
DATABASES = {}

USE_TZ = True
TIME_ZONE = "UTC"

API_MAX_BYTES = int(os.getenv("API_MAX_BYTES", str(1 * 1024 * 1024)))

# ---- Orders ----
ORDERS_DEFAULT_STOCK = int(os.getenv("ORDERS_DEFAULT_STOCK", "100"))
ORDERS_INITIAL_STOCK = _env_stock("ORDERS_INITIAL_STOCK", "SKU-001=100,SKU-002=50,SKU-003=0")

# ---- DRF ----
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_THROTTLE_RATES": {
        "orders_create": os.getenv("ORDERS_THROTTLE_CREATE", "1000/min"),
        "orders_read": os.getenv("ORDERS_THROTTLE_READ", "5000/min"),
    },
}

CACHES = {
    "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"},
}

# ---- Logging (JSON lines, correlated by request id) ----
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "request_id": {"()": "gateway.logging_filters.RequestIdFilter"},
    },
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "filters": ["request_id"],
        },
    },
    "loggers": {
        "orders": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}
