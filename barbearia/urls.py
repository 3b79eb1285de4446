"""
URLs do projeto barbearia.

Localização: barbearia/urls.py
"""
from django.urls import path, include

urlpatterns = [
    path('finance/', include('finance.urls')),
    path('agendamentos/', include('agendamentos.urls')),
]
