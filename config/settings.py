"""
Ops Back-Office – Django Settings
=================================
Django serves as the framework container and the relational backend.
Housekeeping rules live in core/housekeeping; Django does not dictate them.

Deployment-sensitive values come from OPS_* environment variables;
the defaults are for local development only.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
# BASE_DIR = project root (where manage.py lives)
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str) -> list:
    raw = os.environ.get(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("OPS_SECRET_KEY", "ops-dev-key-replace-before-deployment")

DEBUG = _env_bool("OPS_DEBUG", True)

ALLOWED_HOSTS = _env_list("OPS_ALLOWED_HOSTS")

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # ── Ops Modules ───────────────────────────────────────
    "core.housekeeping",
    "core.bootstrap",
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
# SQLite by default. Production DB configured separately.
# IMMEDIATE transactions take the write lock at BEGIN, so concurrent
# marks queue behind each other instead of failing the lock upgrade.
# The test DB is file-backed so threads share one database.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("OPS_DB_PATH", str(BASE_DIR / "db.sqlite3")),
        "OPTIONS": {
            "transaction_mode": "IMMEDIATE",
            "timeout": int(os.environ.get("OPS_DB_TIMEOUT_SECONDS", "20")),
        },
        "TEST": {
            "NAME": os.environ.get(
                "OPS_TEST_DB_PATH", str(BASE_DIR / "test_db.sqlite3")
            ),
        },
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Housekeeping ──────────────────────────────────────────────
HOUSEKEEPING = {
    "DEFAULT_SUPERVISOR": os.environ.get("OPS_HK_DEFAULT_SUPERVISOR", "manager"),
    "CATALOG_CACHE_TTL_SECONDS": int(os.environ.get("OPS_HK_CATALOG_TTL", "300")),
    "CATALOG_CACHE_MAX_SIZE": int(os.environ.get("OPS_HK_CATALOG_MAX_SIZE", "512")),
}

# ── Logging ───────────────────────────────────────────────────
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
        "ops": {
            "handlers": ["console"],
            "level": os.environ.get("OPS_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
