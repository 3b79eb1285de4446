"""
URLs do app agendamentos.

Localização: agendamentos/urls.py
"""
from django.urls import path
from . import views

app_name = 'agendamentos'

urlpatterns = [
    path('api/clientes/', views.clientes_api_view, name='clientes-api'),
    path('api/clientes/<str:cliente_id>/agendamentos/', views.agendamentos_cliente_api_view, name='agendamentos-cliente-api'),
    path('api/estatisticas/', views.estatisticas_api_view, name='estatisticas-api'),
]
