"""
Django settings for the linuxguide project.

Every value that differs between deployments is read from the environment;
the defaults are suitable for local development only.
"""

import os

from datetime import timedelta


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def env_list(name, default=''):
    return [
        item.strip() for item in os.environ.get(name, default).split(',')
        if item.strip()
    ]


BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

SECRET_KEY = os.environ.get(
    'LINUXGUIDE_SECRET_KEY', 'insecure-development-secret-key'
)

DEBUG = env_bool('LINUXGUIDE_DEBUG', True)

ALLOWED_HOSTS = env_list('LINUXGUIDE_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver')


# Application definition

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',

    'corsheaders',
    'rest_framework',

    'linuxguide.apps.core.apps.CoreConfig',
    'linuxguide.apps.authentication.apps.AuthenticationConfig',
    'linuxguide.apps.content.apps.ContentConfig',
    'linuxguide.apps.contact.apps.ContactConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'linuxguide.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'linuxguide.wsgi.application'


# Database

DATABASES = {
    'default': {
        'ENGINE': os.environ.get(
            'LINUXGUIDE_DB_ENGINE', 'django.db.backends.sqlite3'
        ),
        'NAME': os.environ.get(
            'LINUXGUIDE_DB_NAME', os.path.join(BASE_DIR, 'db.sqlite3')
        ),
        'USER': os.environ.get('LINUXGUIDE_DB_USER', ''),
        'PASSWORD': os.environ.get('LINUXGUIDE_DB_PASSWORD', ''),
        'HOST': os.environ.get('LINUXGUIDE_DB_HOST', ''),
        'PORT': os.environ.get('LINUXGUIDE_DB_PORT', ''),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Passwords

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.BCryptSHA256PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2PasswordHasher',
]

# Internationalization

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


# Tell Django about the custom `User` model we created. The string
# `authentication.User` tells Django we are referring to the `User` model in
# the `authentication` module. This module is registered above in a setting
# called `INSTALLED_APPS`.
AUTH_USER_MODEL = 'authentication.User'

# Inactive users must reach AuthenticationService so it can tell them why
# they cannot log in.
AUTHENTICATION_BACKENDS = [
    'django.contrib.auth.backends.AllowAllUsersModelBackend',
]

JWT_EXPIRATION_DELTA = timedelta(
    hours=int(os.environ.get('LINUXGUIDE_JWT_EXPIRY_HOURS', '1'))
)


# CORS

CORS_ALLOW_ALL_ORIGINS = env_bool('LINUXGUIDE_CORS_ALLOW_ALL', False)

CORS_ALLOWED_ORIGINS = env_list(
    'LINUXGUIDE_CORS_ALLOWED_ORIGINS',
    'http://localhost:3000,http://localhost:5173',
)


REST_FRAMEWORK = {
    'EXCEPTION_HANDLER': 'linuxguide.apps.core.exceptions.core_exception_handler',
    'NON_FIELD_ERRORS_KEY': 'error',

    'DEFAULT_AUTHENTICATION_CLASSES': (
        'linuxguide.apps.authentication.backends.JWTAuthentication',
    ),
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
    ),
    'DEFAULT_PAGINATION_CLASS': 'rest_framework.pagination.LimitOffsetPagination',
    'PAGE_SIZE': 20,
}


# Logging

LOG_LEVEL = os.environ.get('LINUXGUIDE_LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
        },
        'linuxguide': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}
