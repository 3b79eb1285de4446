"""
Settings do projeto barbearia.

Localização: barbearia/settings.py

Toda configuração sensível vem de variáveis de ambiente (ou de um .env).
O banco da aplicação é o MongoDB (ver core/database.py); o Django não usa
ORM aqui.
"""
import os
from pathlib import Path
from dotenv import load_dotenv, find_dotenv

load_dotenv(find_dotenv())

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'dev-secret-key-troque-em-producao')

DEBUG = os.getenv('DJANGO_DEBUG', 'false').lower() == 'true'

ALLOWED_HOSTS = [h.strip() for h in os.getenv('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if h.strip()]

INSTALLED_APPS = [
    'core',
    'finance',
    'agendamentos',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'core.middleware.ExceptionLoggingMiddleware',
]

ROOT_URLCONF = 'barbearia.urls'

WSGI_APPLICATION = 'barbearia.wsgi.application'

# Sem ORM: os dados ficam no MongoDB
DATABASES = {}

# MongoDB
MONGO_URI = os.getenv('MONGO_URI')
MONGO_USER = os.getenv('MONGO_USER')
MONGO_PASS = os.getenv('MONGO_PASS')
MONGO_HOST = os.getenv('MONGO_HOST')
MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'barbearia')
MONGO_TIMEOUT_MS = int(os.getenv('MONGO_TIMEOUT_MS', '5000'))

# Fuso usado para "hoje" no PDV e no fluxo de caixa
TIME_ZONE = os.getenv('TIME_ZONE', 'America/Sao_Paulo')
USE_TZ = True
LANGUAGE_CODE = 'pt-br'
USE_I18N = True

# Percentual de comissão quando o barbeiro não tem configuração própria
COMISSAO_PERCENTUAL_PADRAO = float(os.getenv('COMISSAO_PERCENTUAL_PADRAO', '40'))

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'padrao': {
            'format': '%(asctime)s %(levelname)s %(name)s %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'padrao',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
        'pymongo': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}
