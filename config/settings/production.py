from .local import *  # noqa: F401,F403

SECRET_KEY = os.environ['SECRET_KEY']  # noqa: F405
DEBUG = os.getenv('DEBUG', 'False') == 'True'  # noqa: F405
ALLOWED_HOSTS = [host for host in os.getenv('ALLOWED_HOSTS', '').split(',') if host]  # noqa: F405
CSRF_TRUSTED_ORIGINS = [RIDES_PUBLIC_BASE_URL]  # noqa: F405

EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.smtp.EmailBackend')  # noqa: F405
EMAIL_HOST = os.getenv('EMAIL_HOST', 'localhost')  # noqa: F405
EMAIL_PORT = int(os.getenv('EMAIL_PORT', '587'))  # noqa: F405
EMAIL_HOST_USER = os.getenv('EMAIL_HOST_USER', '')  # noqa: F405
EMAIL_HOST_PASSWORD = os.getenv('EMAIL_HOST_PASSWORD', '')  # noqa: F405
EMAIL_USE_TLS = True

# Static files are served by whitenoise, right after the security middleware
MIDDLEWARE = MIDDLEWARE[:1] + ['whitenoise.middleware.WhiteNoiseMiddleware'] + MIDDLEWARE[1:]  # noqa: F405

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}

# ----------------------------
# Logging
# ----------------------------
LOGGING['handlers']['console']['formatter'] = 'verbose'  # noqa: F405
LOGGING['loggers']['django.request'] = {  # noqa: F405
    "handlers": ["console"],
    "level": "WARNING",
    "propagate": False,
}
LOGGING['loggers']['django.db.backends'] = {  # noqa: F405
    "handlers": ["console"],
    "level": "ERROR",
    "propagate": False,
}

# ----------------------------
# Security
# ----------------------------
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True

SECURE_SSL_REDIRECT = os.getenv('SECURE_SSL_REDIRECT', 'True') == 'True'  # noqa: F405
SECURE_HSTS_SECONDS = int(os.getenv('SECURE_HSTS_SECONDS', '3600'))  # noqa: F405
SECURE_HSTS_INCLUDE_SUBDOMAINS = True

USE_X_FORWARDED_HOST = True
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
