import os

from dotenv import load_dotenv

load_dotenv()

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "topology-explorer-dev-only")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h]

INSTALLED_APPS = [
    "topology_explorer.explorer",
]

MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "topology_explorer.urls"

# No persisted state: every graph lives in the process
DATABASES = {}

USE_TZ = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "root": {"handlers": ["console"], "level": os.getenv("TOPOLOGY_LOG_LEVEL", "INFO").upper()},
}

# Control nodes /api/peers/ may fetch from when DEBUG is off, besides TOPOLOGY_CONTROL_URL
TOPOLOGY_ALLOWED_CONTROL_URLS = [
    u.strip().rstrip("/") for u in os.getenv("TOPOLOGY_ALLOWED_CONTROL_URLS", "").split(",") if u.strip()
]
