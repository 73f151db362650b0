import re
from decimal import Decimal
from pathlib import Path

import structlog
from decouple import Csv, config
from dj_database_url import parse as db_url

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Security - Fail Fast: no default forces explicit configuration
SECRET_KEY = config("SECRET_KEY")

DEBUG = config("DEBUG", default=False, cast=bool)

ALLOWED_HOSTS = config("ALLOWED_HOSTS", default="127.0.0.1,localhost", cast=Csv())

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third-party
    "rest_framework",
    "corsheaders",
    "drf_spectacular",
    # Local Apps (Modules)
    "modules.core",
    "modules.catalog",
    "modules.shipping",
    "modules.orders",
    "modules.notifications",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "modules.core.middleware.CorrelationIdMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

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

WSGI_APPLICATION = "config.wsgi.application"

DATABASES = {
    "default": config(
        "DATABASE_URL", default=f'sqlite:///{BASE_DIR / "db.sqlite3"}', cast=db_url
    )
}

# SQLite: writers take the lock when the transaction starts and queue on the
# busy timeout, so concurrent order submissions wait instead of failing.
# The test database is a file because in-memory shared cache has no timeout.
if DATABASES["default"]["ENGINE"] == "django.db.backends.sqlite3":
    DATABASES["default"].setdefault("OPTIONS", {}).update(
        {
            "transaction_mode": "IMMEDIATE",
            "timeout": config("SQLITE_BUSY_TIMEOUT", default=20, cast=int),
        }
    )
    DATABASES["default"].setdefault("TEST", {}).setdefault(
        "NAME", str(BASE_DIR / "test_db.sqlite3")
    )

# Cache - Redis when configured, process-local otherwise
REDIS_URL = config("REDIS_URL", default="")

if REDIS_URL:
    CACHES = {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": REDIS_URL,
            "OPTIONS": {
                "CLIENT_CLASS": "django_redis.client.DefaultClient",
            },
        }
    }
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        }
    }

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"
    },
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Internationalization
LANGUAGE_CODE = "en-au"
TIME_ZONE = config("TIME_ZONE", default="Australia/Sydney")
USE_I18N = True
USE_TZ = True

# ---------------------------------------------------------------------------
# Celery (async tasks via Redis)
# ---------------------------------------------------------------------------
CELERY_BROKER_URL = config("CELERY_BROKER_URL", default="redis://localhost:6379/0")
CELERY_RESULT_BACKEND = config(
    "CELERY_RESULT_BACKEND", default="redis://localhost:6379/0"
)
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_ALWAYS_EAGER = config("CELERY_TASK_ALWAYS_EAGER", default=False, cast=bool)
CELERY_TASK_IGNORE_RESULT = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# DRF Configuration. Fail closed: every view requires the admin token unless
# it explicitly opts into ``AllowAny``.
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "modules.core.permissions.HasAdminToken",
    ],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_THROTTLE_CLASSES": [
        "rest_framework.throttling.AnonRateThrottle",
        "rest_framework.throttling.ScopedRateThrottle",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "anon": config("ANON_THROTTLE_RATE", default="2000/day"),
        "order_creation": config("ORDER_CREATION_RATE", default="10/minute"),
        "shipping_quote": config("SHIPPING_QUOTE_RATE", default="30/minute"),
    },
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

if DEBUG:
    REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"].append(
        "rest_framework.renderers.BrowsableAPIRenderer"
    )

# Shared secret for privileged endpoints (``X-Admin-Token`` header).
# Empty means every privileged request is rejected.
ADMIN_SECRET = config("ADMIN_SECRET", default="")

# CORS
CORS_ALLOWED_ORIGINS = config(
    "CORS_ALLOWED_ORIGINS", default="http://localhost:3000", cast=Csv()
)

# CSRF
CSRF_TRUSTED_ORIGINS = config(
    "CSRF_TRUSTED_ORIGINS", default="http://localhost:3000", cast=Csv()
)

# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
ORDER_ID_PREFIX = config("ORDER_ID_PREFIX", default="GRX")

# ---------------------------------------------------------------------------
# Shipping (Shippo rate quotes)
# ---------------------------------------------------------------------------
SHIPPO_API_KEY = config("SHIPPO_API_KEY", default="")
SHIPPO_API_URL = config("SHIPPO_API_URL", default="https://api.goshippo.com")
SHIPPING_MARKUP = config("SHIPPING_MARKUP", default="1.10", cast=Decimal)
SHIPPING_TIMEOUT = config("SHIPPING_TIMEOUT", default=10.0, cast=float)

SHIPPING_ORIGIN = {
    "name": config("SHIPPING_FROM_NAME", default="Griffix Racing"),
    "street1": config("SHIPPING_FROM_STREET", default=""),
    "city": config("SHIPPING_FROM_CITY", default=""),
    "state": config("SHIPPING_FROM_STATE", default=""),
    "zip": config("SHIPPING_FROM_ZIP", default=""),
    "country": config("SHIPPING_FROM_COUNTRY", default="AU"),
    "phone": config("SHIPPING_FROM_PHONE", default=""),
}

# ---------------------------------------------------------------------------
# Catalog (Google Sheets, cached in-process)
# ---------------------------------------------------------------------------
CATALOG_SHEET_ID = config("CATALOG_SHEET_ID", default="")
CATALOG_API_KEY = config("CATALOG_API_KEY", default="")
CATALOG_API_URL = config(
    "CATALOG_API_URL", default="https://sheets.googleapis.com/v4/spreadsheets"
)
CATALOG_CACHE_TTL = config("CATALOG_CACHE_TTL", default=60.0, cast=float)
CATALOG_MAX_STALE = config("CATALOG_MAX_STALE", default=600.0, cast=float)
CATALOG_TIMEOUT = config("CATALOG_TIMEOUT", default=10.0, cast=float)

# ---------------------------------------------------------------------------
# Notifications (SMTP)
# ---------------------------------------------------------------------------
EMAIL_BACKEND = config(
    "EMAIL_BACKEND", default="django.core.mail.backends.smtp.EmailBackend"
)
EMAIL_HOST = config("SMTP_HOST", default="smtp.gmail.com")
EMAIL_PORT = config("SMTP_PORT", default=587, cast=int)
EMAIL_HOST_USER = config("SMTP_USER", default="")
EMAIL_HOST_PASSWORD = config("SMTP_PASS", default="")
EMAIL_USE_TLS = config("SMTP_USE_TLS", default=True, cast=bool)
EMAIL_TIMEOUT = config("EMAIL_TIMEOUT", default=15, cast=int)
DEFAULT_FROM_EMAIL = config(
    "DEFAULT_FROM_EMAIL", default=EMAIL_HOST_USER or "orders@localhost"
)
SHOP_NAME = config("SHOP_NAME", default="Griffix Racing")
OWNER_EMAIL = config("OWNER_EMAIL", default="")
PAYPAL_ME_URL = config("PAYPAL_ME_URL", default="")
NOTIFICATION_TIME_LIMIT = config("NOTIFICATION_TIME_LIMIT", default=60, cast=int)

# ---------------------------------------------------------------------------
# drf-spectacular (OpenAPI / Swagger)
# ---------------------------------------------------------------------------
SPECTACULAR_SETTINGS = {
    "TITLE": "Storefront Fulfillment API",
    "DESCRIPTION": "Shipping quotes, orders and catalog for the storefront.",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "SERVE_PERMISSIONS": ["rest_framework.permissions.AllowAny"],
    "APPEND_COMPONENTS": {
        "securitySchemes": {
            "AdminToken": {
                "type": "apiKey",
                "in": "header",
                "name": "X-Admin-Token",
            }
        }
    },
}

# ---------------------------------------------------------------------------
# Structured Logging (structlog + Django LOGGING)
# ---------------------------------------------------------------------------
SENSITIVE_PATTERN = re.compile(
    r"(ShippoToken\s+)(\S+)"
    r"|(password|passwd|secret|token|api_key|apikey|authorization|key)"
    r"""([=:]\s*["']?)((?:ShippoToken\s+|Bearer\s+)?[^\s,}"'&]+)""",
    re.IGNORECASE,
)


def _mask(match: re.Match) -> str:
    if match.group(1):
        return f"{match.group(1)}***MASKED***"
    return f"{match.group(3)}{match.group(4)}***MASKED***"


def mask_sensitive_data(_, __, event_dict):
    """Processor that masks passwords, tokens and API keys in log values."""
    for key, value in list(event_dict.items()):
        if isinstance(value, str):
            event_dict[key] = SENSITIVE_PATTERN.sub(_mask, value)
    return event_dict


# Shared processors used by both structlog and stdlib logging
_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    mask_sensitive_data,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

structlog.configure(
    processors=[
        *_shared_processors,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processors": [
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
            "foreign_pre_chain": _shared_processors,
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": config("LOG_LEVEL", default="INFO"),
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "django.server": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
        "celery": {
            "handlers": ["console"],
            "level": config("CELERY_LOG_LEVEL", default="WARNING"),
            "propagate": False,
        },
    },
}
