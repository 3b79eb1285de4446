"""
Views do app finance.

Localização: finance/views.py

Endpoints JSON do PDV, do fluxo de caixa, das comissões e da auditoria.
Elas chamam services para executar a lógica de negócio e retornam respostas.
"""
import json
import logging
from django.http import JsonResponse
from core.exceptions import ValidationError
from core.services.audit_log_service import AuditLogService
from core.utils.datas import parse_data, parse_dia, para_local, hoje_local, limites_do_dia
from finance.services.categoria_service import CategoriaService
from finance.services.comissao_service import ComissaoService
from finance.services.fluxo_caixa_service import FluxoCaixaService
from finance.services.historico_service import serializar_transacao
from finance.services.quick_transaction_service import QuickTransactionService
from finance.services.transacao_service import TransacaoService

logger = logging.getLogger(__name__)


def _ler_json(request):
    """
    Lê o corpo JSON da requisição (ou o form, se não for JSON).

    Raises:
        ValueError: Se o corpo não for um objeto JSON válido
    """
    if request.content_type and 'application/json' in request.content_type:
        try:
            dados = json.loads(request.body or b'{}')
        except json.JSONDecodeError as e:
            raise ValueError(f"JSON inválido: {e}")
        if not isinstance(dados, dict):
            raise ValueError('JSON deve ser um objeto')
        return dados
    return request.POST.dict()


def _como_bool(valor, padrao=True):
    if valor is None:
        return padrao
    if isinstance(valor, str):
        return valor.strip().lower() not in ('', '0', 'false', 'nao', 'não')
    return bool(valor)


def _limite(request, padrao, maximo):
    try:
        limite = int(request.GET.get('limite', padrao))
    except ValueError:
        return padrao
    return limite if 1 <= limite <= maximo else padrao


def _filtros(request):
    barbeiro_id = request.GET.get('barbeiro_id')
    return {'barbeiro_id': barbeiro_id} if barbeiro_id else {}


def index_view(request):
    """View principal do finance."""
    return JsonResponse({
        'message': 'Finance API',
        'status': 'ok'
    })


def registrar_transacao_api_view(request):
    """
    API endpoint para registrar transação do PDV.

    POST /finance/api/pdv/transacoes/

    Body JSON:
    {
        "tipo": "ENTRADA",
        "valor": 45.00,
        "descricao": "Corte + Barba",
        "metodo_pagamento": "PIX",
        "categoria": "Serviços",
        "cliente": "Carlos Silva",
        "barbeiro": "João Silva",
        "observacoes": "",
        "agendamento_id": null,
        "idempotency_key": "..."
    }
    """
    if request.method != 'POST':
        return JsonResponse({'error': 'Método não permitido'}, status=405)

    try:
        dados = _ler_json(request)
    except ValueError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)

    resultado = QuickTransactionService().registrar_transacao(dados)
    status = 201 if resultado['success'] else 400
    return JsonResponse(resultado, status=status, json_dumps_params={'ensure_ascii': False})


def validar_transacao_api_view(request):
    """
    API endpoint para validar uma transação sem gravar.

    POST /finance/api/pdv/transacoes/validar/
    """
    if request.method != 'POST':
        return JsonResponse({'error': 'Método não permitido'}, status=405)

    try:
        dados = _ler_json(request)
    except ValueError as e:
        return JsonResponse({'valid': False, 'errors': [str(e)]}, status=400)

    resultado = TransacaoService.validar_transacao(dados)
    return JsonResponse(resultado, json_dumps_params={'ensure_ascii': False})


def cancelar_transacao_api_view(request, transacao_id):
    """
    API endpoint para cancelar transação.

    POST /finance/api/pdv/transacoes/<id>/cancelar/
    """
    if request.method != 'POST':
        return JsonResponse({'error': 'Método não permitido'}, status=405)

    resultado = QuickTransactionService().cancelar_transacao(transacao_id)
    status = 200 if resultado['success'] else 404
    return JsonResponse(resultado, status=status, json_dumps_params={'ensure_ascii': False})


def historico_api_view(request):
    """
    API endpoint para o histórico recente do PDV.

    GET /finance/api/pdv/historico/?limite=10&barbeiro_id=...
    """
    limite = _limite(request, 10, 100)
    historico = QuickTransactionService().obter_historico_recente(limite, _filtros(request))
    return JsonResponse({'transacoes': historico}, json_dumps_params={'ensure_ascii': False})


def estatisticas_api_view(request):
    """
    API endpoint para as estatísticas do dia.

    GET /finance/api/pdv/estatisticas/?barbeiro_id=...
    """
    stats = QuickTransactionService().obter_estatisticas_dia(_filtros(request))
    return JsonResponse(stats, json_dumps_params={'ensure_ascii': False})


def relatorio_pdv_api_view(request):
    """
    API endpoint para o relatório do PDV.

    GET /finance/api/pdv/relatorio/?inicio=2026-01-01&fim=2026-01-31

    Sem datas, usa o dia de hoje.
    """
    try:
        inicio = parse_data(request.GET.get('inicio'))
        fim = parse_data(request.GET.get('fim'), fim_do_dia=True)
    except ValueError as e:
        return JsonResponse({'error': 'Data inválida', 'message': str(e)}, status=400)

    hoje_inicio, hoje_fim = limites_do_dia()
    inicio = inicio or hoje_inicio
    fim = fim or hoje_fim
    if fim < inicio:
        return JsonResponse({'error': 'Data final anterior à inicial'}, status=400)

    transacoes = QuickTransactionService().obter_relatorio_pdv(inicio, fim)
    return JsonResponse({
        'inicio': para_local(inicio),
        'fim': para_local(fim),
        'transacoes': transacoes
    }, json_dumps_params={'ensure_ascii': False})


def fluxo_caixa_api_view(request):
    """
    API endpoint para o fluxo de caixa.

    GET /finance/api/fluxo-caixa/?inicio=2026-01-01&fim=2026-01-31
    """
    try:
        data_inicio = parse_dia(request.GET.get('inicio')) or hoje_local()
        data_fim = parse_dia(request.GET.get('fim')) or data_inicio
    except ValueError as e:
        return JsonResponse({'error': 'Data inválida', 'message': str(e)}, status=400)

    service = FluxoCaixaService()
    return JsonResponse({
        'movimentacoes': service.listar_movimentacoes(data_inicio, data_fim),
        **service.obter_saldo(data_inicio, data_fim)
    }, json_dumps_params={'ensure_ascii': False})


def categorias_api_view(request):
    """
    API endpoint para categorias financeiras.

    GET /finance/api/categorias/?tipo=DESPESA
    """
    tipo = request.GET.get('tipo')
    categorias = CategoriaService().listar_categorias(tipo)
    return JsonResponse({'categorias': categorias}, json_dumps_params={'ensure_ascii': False})


def comissoes_config_api_view(request):
    """
    GET  /finance/api/comissoes/config/?barbeiro_id=...  -> lista configurações
    POST /finance/api/comissoes/config/                  -> define percentual

    Body JSON (POST):
    {
        "barbeiro_id": "...",
        "percentual": 50,
        "ativo": true
    }
    """
    service = ComissaoService()

    if request.method == 'POST':
        try:
            dados = _ler_json(request)
            config = service.configurar_percentual(
                barbeiro_id=dados.get('barbeiro_id'),
                percentual=dados.get('percentual'),
                ativo=_como_bool(dados.get('ativo'))
            )
        except ValidationError as e:
            return JsonResponse({'success': False, 'errors': e.errors}, status=400)
        except ValueError as e:
            return JsonResponse({'success': False, 'errors': [str(e)]}, status=400)

        return JsonResponse({'success': True, 'config': config}, status=201,
                            json_dumps_params={'ensure_ascii': False})

    configs = service.listar_configuracoes(request.GET.get('barbeiro_id'))
    return JsonResponse({'configuracoes': configs}, json_dumps_params={'ensure_ascii': False})


def comissoes_relatorio_api_view(request):
    """
    API endpoint para o relatório de comissões de um barbeiro.

    GET /finance/api/comissoes/relatorio/?barbeiro_id=...&inicio=2026-01-01&fim=2026-01-31

    Sem datas, usa o dia de hoje.
    """
    barbeiro_id = request.GET.get('barbeiro_id')
    if not barbeiro_id:
        return JsonResponse({'error': 'barbeiro_id é obrigatório'}, status=400)

    try:
        inicio = parse_data(request.GET.get('inicio'))
        fim = parse_data(request.GET.get('fim'), fim_do_dia=True)
    except ValueError as e:
        return JsonResponse({'error': 'Data inválida', 'message': str(e)}, status=400)

    hoje_inicio, hoje_fim = limites_do_dia()
    inicio = inicio or hoje_inicio
    fim = fim or hoje_fim
    if fim < inicio:
        return JsonResponse({'error': 'Data final anterior à inicial'}, status=400)

    relatorio = ComissaoService().gerar_relatorio(barbeiro_id, inicio, fim)
    return JsonResponse(relatorio, json_dumps_params={'ensure_ascii': False})


def auditoria_erros_api_view(request):
    """
    API endpoint para os erros registrados no audit log (inclusive as falhas
    de comissão, agendamento e fluxo de caixa que não chegam ao PDV).

    GET /finance/api/auditoria/erros/?entity=comissao&limite=50
    """
    erros = AuditLogService().get_errors(
        entity=request.GET.get('entity') or None,
        limit=_limite(request, 100, 500)
    )
    return JsonResponse({'erros': [serializar_transacao(e) for e in erros]},
                        json_dumps_params={'ensure_ascii': False})


def auditoria_entidade_api_view(request, entity):
    """
    API endpoint para o histórico de auditoria de uma entidade.

    GET /finance/api/auditoria/transacao/?entity_id=...
    """
    logs = AuditLogService().get_entity_logs(
        entity,
        entity_id=request.GET.get('entity_id') or None,
        limit=_limite(request, 100, 500)
    )
    return JsonResponse({'logs': [serializar_transacao(log) for log in logs]},
                        json_dumps_params={'ensure_ascii': False})
