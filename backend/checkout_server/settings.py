import json
import os
from pathlib import Path
from dotenv import load_dotenv
from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent
# Try root project .env (one directory up from BASE_DIR) first, then local
root_env = (BASE_DIR.parent / '.env')
local_env = (BASE_DIR / '.env')
if root_env.exists():
    load_dotenv(root_env)
elif local_env.exists():
    load_dotenv(local_env)

# ---------------------------------------------------------------------------
# SECRET KEY HANDLING
# The service keeps no sessions or signed cookies, but Django still requires a
# key. In production (DEBUG=False) a real key must be provided.
# ---------------------------------------------------------------------------
SECRET_KEY = os.getenv('DJANGO_SECRET_KEY') or os.getenv('SECRET_KEY') or 'dev-secret-key'
DEBUG = os.getenv('DEBUG', 'True') == 'True'
ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', '*').split(',')

if SECRET_KEY == 'dev-secret-key' and not DEBUG:
    raise ImproperlyConfigured(
        'SECRET_KEY is missing or using insecure default. Set DJANGO_SECRET_KEY or SECRET_KEY env var.'
    )

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    # apps.common overrides runserver, so it must precede staticfiles
    'apps.common',
    'django.contrib.staticfiles',
    'rest_framework',
    'drf_spectacular',
    'apps.api',
    'apps.checkout',
]

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
    'EXCEPTION_HANDLER': 'apps.api.exceptions.global_exception_handler',
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'Checkout API',
    'DESCRIPTION': 'Creates hosted payment checkout sessions for multi-currency carts.',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
    'COMPONENT_SPLIT_REQUEST': True,
    'SERVE_PERMISSIONS': ['rest_framework.permissions.AllowAny'],
}

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'checkout_server.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'checkout_server.wsgi.application'

# No persistence: every entity lives only for the duration of a request.
DATABASES = {}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = os.getenv('STATIC_ROOT', str(BASE_DIR / 'staticfiles'))

# Files served verbatim at the server root (landing pages, frontend assets).
PUBLIC_DIR = Path(os.getenv('PUBLIC_DIR', str(BASE_DIR / 'public')))

# Port used by `manage.py runserver` when none is given on the command line.
PORT = int(os.getenv('PORT', '4400'))

# ---------------------------------------------------------------------------
# LOGGING
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'plain': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'plain',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': os.getenv('DJANGO_LOG_LEVEL', 'WARNING').upper(),
            'propagate': False,
        },
    },
}

# ---------------------------------------------------------------------------
# CHECKOUT
# Credentials and business rules consumed by apps.checkout.config. Nothing
# below is read at request time; CheckoutConfig is built once per process.
# ---------------------------------------------------------------------------
STRIPE_SECRET_KEY = os.getenv('STRIPE_SECRET_KEY', '')
CURRENCYLAYER_ACCESS_KEY = os.getenv('CURRENCYLAYER_ACCESS_KEY', '')
CURRENCYLAYER_BASE_URL = os.getenv('CURRENCYLAYER_BASE_URL', 'https://api.currencylayer.com')
RATE_TIMEOUT_SECONDS = float(os.getenv('RATE_TIMEOUT_SECONDS', '10'))

CHECKOUT_BASE_CURRENCY = os.getenv('CHECKOUT_BASE_CURRENCY', 'USD').upper()
CHECKOUT_DEFAULT_CURRENCY = os.getenv('CHECKOUT_DEFAULT_CURRENCY', 'USD').upper()
CHECKOUT_SUCCESS_URL = os.getenv('CHECKOUT_SUCCESS_URL', f'http://localhost:{PORT}/success.html')
CHECKOUT_CANCEL_URL = os.getenv('CHECKOUT_CANCEL_URL', f'http://localhost:{PORT}/cancel.html')
CHECKOUT_ALLOWED_COUNTRIES = [
    code.strip().upper()
    for code in os.getenv('CHECKOUT_ALLOWED_COUNTRIES', 'US,CA').split(',')
    if code.strip()
]

_raw_rules = os.getenv('CHECKOUT_DISCOUNT_RULES')
try:
    CHECKOUT_DISCOUNT_RULES = (
        json.loads(_raw_rules)
        if _raw_rules
        else {
            'DISCOUNT10': {'percent': '10'},
            'FLAT5': {'amount_minor': 500},
        }
    )
except ValueError as exc:
    raise ImproperlyConfigured(f'CHECKOUT_DISCOUNT_RULES is not valid JSON: {exc}') from exc
