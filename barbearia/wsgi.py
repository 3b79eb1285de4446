"""
WSGI do projeto barbearia.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'barbearia.settings')

application = get_wsgi_application()
