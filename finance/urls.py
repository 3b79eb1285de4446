"""
URLs do app finance.

Localização: finance/urls.py

Define as rotas do PDV, do fluxo de caixa, das comissões e da auditoria.
"""
from django.urls import path
from . import views

app_name = 'finance'

urlpatterns = [
    path('', views.index_view, name='index'),
    path('api/pdv/transacoes/', views.registrar_transacao_api_view, name='registrar-transacao-api'),
    path('api/pdv/transacoes/validar/', views.validar_transacao_api_view, name='validar-transacao-api'),
    path('api/pdv/transacoes/<str:transacao_id>/cancelar/', views.cancelar_transacao_api_view, name='cancelar-transacao-api'),
    path('api/pdv/historico/', views.historico_api_view, name='historico-api'),
    path('api/pdv/estatisticas/', views.estatisticas_api_view, name='estatisticas-api'),
    path('api/pdv/relatorio/', views.relatorio_pdv_api_view, name='relatorio-pdv-api'),
    path('api/fluxo-caixa/', views.fluxo_caixa_api_view, name='fluxo-caixa-api'),
    path('api/categorias/', views.categorias_api_view, name='categorias-api'),
    path('api/comissoes/config/', views.comissoes_config_api_view, name='comissoes-config-api'),
    path('api/comissoes/relatorio/', views.comissoes_relatorio_api_view, name='comissoes-relatorio-api'),
    path('api/auditoria/erros/', views.auditoria_erros_api_view, name='auditoria-erros-api'),
    path('api/auditoria/<str:entity>/', views.auditoria_entidade_api_view, name='auditoria-entidade-api'),
]
