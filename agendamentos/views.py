"""
Views do app agendamentos.

Localização: agendamentos/views.py

Busca de clientes e agendamentos usada pela tela do PDV.
"""
import json
import logging
from django.http import JsonResponse
from core.decorators import audit_log
from core.exceptions import ValidationError
from agendamentos.services.agendamento_service import AgendamentoService

logger = logging.getLogger(__name__)


def clientes_api_view(request):
    """
    GET  /agendamentos/api/clientes/?termo=joao  -> busca clientes
    POST /agendamentos/api/clientes/             -> cadastra cliente

    Body JSON (POST):
    {
        "nome": "Carlos Silva",
        "telefone": "(11) 99999-1111",
        "email": "carlos@email.com"
    }
    """
    if request.method == 'POST':
        return _criar_cliente(request)

    clientes = AgendamentoService().buscar_clientes(request.GET.get('termo', ''))
    return JsonResponse({'clientes': clientes}, json_dumps_params={'ensure_ascii': False})


@audit_log(action='criar_cliente', entity='cliente')
def _criar_cliente(request):
    try:
        data = json.loads(request.body or b'{}')
    except json.JSONDecodeError:
        return JsonResponse({'error': 'JSON inválido'}, status=400)
    if not isinstance(data, dict):
        return JsonResponse({'error': 'JSON deve ser um objeto'}, status=400)

    try:
        cliente = AgendamentoService().criar_cliente(
            nome=data.get('nome', ''),
            telefone=data.get('telefone'),
            email=data.get('email')
        )
    except ValidationError as e:
        return JsonResponse({'error': str(e)}, status=400)

    return JsonResponse({
        'success': True,
        'cliente': cliente
    }, status=201, json_dumps_params={'ensure_ascii': False})


def agendamentos_cliente_api_view(request, cliente_id):
    """
    GET /agendamentos/api/clientes/<id>/agendamentos/
    """
    agendamentos = AgendamentoService().buscar_agendamentos_cliente(cliente_id)
    return JsonResponse({'agendamentos': agendamentos}, json_dumps_params={'ensure_ascii': False})


def estatisticas_api_view(request):
    """
    GET /agendamentos/api/estatisticas/

    Contagem dos agendamentos de hoje por status.
    """
    return JsonResponse(AgendamentoService().obter_estatisticas_agendamentos())
