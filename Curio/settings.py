# settings.py
from pathlib import Path
import os
from celery.schedules import crontab
from dotenv import load_dotenv
import sentry_sdk
from sentry_sdk.integrations.django import DjangoIntegration
# ---------------------- PATHS & ENV ----------------------
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv()

# ---------------------- EXTERNAL APIS --------------------------
SONGLINK_API_URL = os.getenv("SONGLINK_API_URL", "https://api.song.link/v1-alpha.1/links")
# (connect, read) in seconds
SONGLINK_TIMEOUT = (3, int(os.getenv("SONGLINK_READ_TIMEOUT", "10")))

FARCASTER_HUB_URL = os.getenv("FARCASTER_HUB_URL", "https://hub.farcaster.xyz:2281")
WARPCAST_API_URL = os.getenv("WARPCAST_API_URL", "https://client.warpcast.com/v2")
NEYNAR_API_KEY = os.getenv("NEYNAR_API_KEY")
FARCASTER_HTTP_TIMEOUT = (3, 15)

FARCASTER_NOTIFICATION_URL = os.getenv("FARCASTER_NOTIFICATION_URL")
APP_BASE_URL = os.getenv("APP_BASE_URL", "https://music-curator.vercel.app")

# ---------------------- CURIO RULES ----------------------
CURIO_ALLOW_SELF_TIP = os.getenv("CURIO_ALLOW_SELF_TIP", "True") == "True"
CURIO_MAX_TIP_USD = int(os.getenv("CURIO_MAX_TIP_USD", "10000"))
CURIO_TASTE_OVERLAP_SCAN_LIMIT = int(os.getenv("CURIO_TASTE_OVERLAP_SCAN_LIMIT", "50"))
CURIO_FEED_MAX_LIMIT = 100

# ---------------------- SECURITY / DEBUG ----------------------
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-change-me")
DEBUG = os.getenv("DEBUG", "True") == "True"
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "127.0.0.1,localhost,testserver").split(",")
# ---------------------- CORS / CSRF ----------------------
# Mini App frontend, comma separated
CORS_ALLOWED_ORIGINS = [
    origin for origin in os.getenv("CURIO_CORS_ORIGINS", "http://127.0.0.1:3000").split(",") if origin
]

# ---------------------- DJANGO CORE ----------------------
INSTALLED_APPS = [
    # Django
    "django_prometheus",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third-party
    "corsheaders",
    "rest_framework",
    "drf_spectacular",
    "drf_spectacular_sidecar",
    'django_celery_beat',

    # Local apps
    'music.apps.MusicConfig',
    'curators.apps.CuratorsConfig',
    'recommendations.apps.RecommendationsConfig',
]

MIDDLEWARE = [
    "django_prometheus.middleware.PrometheusBeforeMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "django_prometheus.middleware.PrometheusAfterMiddleware",
]

ROOT_URLCONF = 'Curio.urls'

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = 'Curio.wsgi.application'


# ---------------------- DATABASE ----------------------
if os.getenv("POSTGRES_DB"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("POSTGRES_DB"),
            "USER": os.getenv("POSTGRES_USER", "postgres"),
            "PASSWORD": os.getenv("POSTGRES_PASSWORD", ""),
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


# ---------------------- INTERNATIONALIZATION ----------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True


# ---------------------- STATIC FILES ----------------------
STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# ---------------------- DRF / REST ----------------------
# Identity comes from the Mini App context (fid in the payload); no auth layer.
REST_FRAMEWORK = {
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "Curio.exceptions.curio_exception_handler",
}


# ---------------------- SPECTACULAR / SWAGGER ----------------------
SPECTACULAR_SETTINGS = {
    "TITLE": "Curio",
    "DESCRIPTION": "API for sharing, co-signing and tipping music recommendations",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "SWAGGER_UI_DIST": "SIDECAR",
    "SWAGGER_UI_FAVICON_HREF": "SIDECAR",
    "REDOC_DIST": "SIDECAR",
}


# ---------------------- CELERY ----------------------
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", 'redis://localhost:6379/0')
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "False") == "True"
CELERY_BEAT_SCHEDULER = "django_celery_beat.schedulers:DatabaseScheduler"
CELERY_BEAT_SCHEDULE = {
    "reconcile-curator-scores": {
        "task": "curators.tasks.profile_tasks.reconcile_curator_scores",
        "schedule": crontab(hour=4, minute=0),
    },
}


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": os.getenv("LOG_LEVEL", "INFO"),
    },
}

SENTRY_DSN = os.getenv("SENTRY_DSN")

if SENTRY_DSN:
    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[DjangoIntegration()],
        traces_sample_rate=0.2,      # v1: 20% requests
        send_default_pii=False,      # GDPR-safe
        environment=os.getenv("ENV", "local"),
    )
