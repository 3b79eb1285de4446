"""
Service das transações rápidas do PDV.

Localização: finance/services/quick_transaction_service.py

Registrar uma transação no PDV é uma sequência de passos, executados um
depois do outro e sem transação de banco:

1. valida os dados
2. resolve categoria e barbeiro (falha vira referência nula)
3. grava a transação (único passo cujo erro chega ao chamador)
4. comissão, se for receita com barbeiro
5. vínculo com agendamento (finaliza o existente ou cria um retroativo)
6. movimentação no fluxo de caixa

Os passos 4 a 6 são best-effort: falhas vão para o log e para o audit_log,
e a transação gravada no passo 3 continua válida.
"""
import logging
from typing import Dict, Any, List, Optional
from datetime import datetime
from core.exceptions import LookupMiss, ValidationError, PersistenceError
from core.services.audit_log_service import AuditLogService
from agendamentos.services.agendamento_service import AgendamentoService
from agendamentos.services.profissional_service import ProfissionalService
from finance.models.transacao_model import TransacaoModel
from finance.services.categoria_service import CategoriaService
from finance.services.comissao_service import ComissaoService
from finance.services.fluxo_caixa_service import FluxoCaixaService
from finance.services.historico_service import HistoricoService
from finance.services.transacao_service import TransacaoService, parse_valor

logger = logging.getLogger(__name__)


class QuickTransactionService:
    """
    Service do PDV.

    Exemplo de uso:
        service = QuickTransactionService()
        resultado = service.registrar_transacao({
            'tipo': 'ENTRADA',
            'valor': 45.00,
            'descricao': 'Corte + Barba',
            'metodo_pagamento': 'PIX',
            'barbeiro': 'João Silva'
        })
        # {'success': True, 'transaction_id': '...'}
    """

    def __init__(self, db=None, agendamento_service: Optional[AgendamentoService] = None):
        self.transacao_service = TransacaoService(db)
        self.categoria_service = CategoriaService(db)
        self.profissional_service = ProfissionalService(db)
        self.comissao_service = ComissaoService(db)
        self.fluxo_caixa_service = FluxoCaixaService(db)
        self.historico_service = HistoricoService(db)
        self.agendamento_service = agendamento_service or AgendamentoService(db)
        self.audit_service = AuditLogService(db)

    def validar_transacao(self, dados: Dict[str, Any]) -> Dict[str, Any]:
        """
        Valida sem gravar. Ver TransacaoService.validar_transacao.
        """
        return TransacaoService.validar_transacao(dados)

    def registrar_transacao(self, dados: Dict[str, Any]) -> Dict[str, Any]:
        """
        Registra uma transação do PDV e seus efeitos colaterais.

        Args:
            dados: Dict com
                tipo: 'ENTRADA' ou 'SAIDA'
                valor: Valor (> 0)
                descricao: Descrição
                metodo_pagamento: obrigatório para ENTRADA
                categoria: nome da categoria, obrigatório para SAIDA
                cliente: nome do cliente (opcional)
                barbeiro: nome do barbeiro (opcional)
                observacoes: texto livre (opcional)
                agendamento_id: agendamento sendo pago (opcional)
                idempotency_key: chave para ignorar reenvios (opcional)

        Returns:
            Dict {'success': bool, 'transaction_id': str} ou
            {'success': False, 'error': str}
        """
        validacao = self.validar_transacao(dados)
        if not validacao['valid']:
            return {'success': False, 'error': ', '.join(validacao['errors'])}

        try:
            idempotency_key = dados.get('idempotency_key')
            if idempotency_key:
                existente = self.transacao_service.buscar_por_idempotency_key(idempotency_key)
                if existente:
                    logger.info(f"[PDV] Reenvio ignorado, chave {idempotency_key}")
                    return {'success': True, 'transaction_id': str(existente['_id'])}

            tipo = TransacaoModel.tipo_persistido(dados['tipo'])
            valor = parse_valor(dados['valor'])

            categoria_id = self.categoria_service.resolver_categoria(dados.get('categoria'), tipo)
            barbeiro_id = self._resolver_barbeiro(dados.get('barbeiro'))

            transacao = self.transacao_service.criar_transacao(
                tipo=tipo,
                valor=valor,
                descricao=str(dados['descricao']).strip(),
                metodo_pagamento=dados.get('metodo_pagamento'),
                categoria_id=categoria_id,
                barbeiro_id=barbeiro_id,
                observacoes=dados.get('observacoes'),
                cliente_nome=str(dados.get('cliente') or '').strip() or None,
                idempotency_key=idempotency_key
            )
        except ValidationError as e:
            return {'success': False, 'error': str(e)}
        except PersistenceError as e:
            self.audit_service.log_error(
                action='registrar_transacao',
                entity='transacao',
                error=e,
                payload={'descricao': dados.get('descricao'), 'valor': dados.get('valor')}
            )
            return {'success': False, 'error': str(e)}
        except Exception as e:
            logger.exception(f"[PDV] Erro inesperado ao registrar transação: {e}")
            self.audit_service.log_error(action='registrar_transacao', entity='transacao', error=e)
            return {'success': False, 'error': 'Erro interno do sistema'}

        transacao_id = str(transacao['_id'])
        logger.info(f"[PDV] Transação {transacao_id} registrada: {tipo} R$ {transacao['valor']:.2f}")

        if tipo == TransacaoModel.RECEITA and barbeiro_id:
            self.comissao_service.calcular_comissao(transacao_id, barbeiro_id, transacao['valor'])

        if tipo == TransacaoModel.RECEITA:
            self._vincular_agendamento(transacao, dados, barbeiro_id)

        self.fluxo_caixa_service.registrar_movimentacao(transacao)

        self._auditar_sucesso('registrar_transacao', transacao_id, {
            'tipo': tipo,
            'valor': transacao['valor'],
            'barbeiro_id': barbeiro_id,
        })

        return {'success': True, 'transaction_id': transacao_id}

    def cancelar_transacao(self, transacao_id: str) -> Dict[str, Any]:
        """
        Cancela uma transação (status CANCELADA).

        Returns:
            Dict {'success': bool, 'error'?: str}
        """
        try:
            cancelada = self.transacao_service.cancelar_transacao(transacao_id)
        except PersistenceError as e:
            return {'success': False, 'error': str(e)}

        if not cancelada:
            return {'success': False, 'error': 'Transação não encontrada'}

        logger.info(f"[PDV] Transação {transacao_id} cancelada")
        self._auditar_sucesso('cancelar_transacao', transacao_id)
        return {'success': True}

    def obter_historico_recente(self, limite: int = 10,
                                filtros: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return self.historico_service.obter_historico_recente(limite, filtros)

    def obter_estatisticas_dia(self, filtros: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.historico_service.obter_estatisticas_dia(filtros)

    def obter_relatorio_pdv(self, data_inicio: datetime, data_fim: datetime) -> List[Dict[str, Any]]:
        return self.historico_service.obter_relatorio_pdv(data_inicio, data_fim)

    def _resolver_barbeiro(self, nome: Optional[str]) -> Optional[str]:
        try:
            return self.profissional_service.resolver_barbeiro(nome)
        except Exception as e:
            logger.warning(f"[PDV] Erro ao buscar barbeiro '{nome}', seguindo sem barbeiro: {e}")
            return None

    def _vincular_agendamento(self, transacao: Dict[str, Any], dados: Dict[str, Any],
                              barbeiro_id: Optional[str]) -> None:
        """
        Com agendamento_id: finaliza o agendamento.
        Sem agendamento_id, com cliente e barbeiro: cria um agendamento retroativo.
        """
        transacao_id = str(transacao['_id'])
        agendamento_id = dados.get('agendamento_id')
        cliente_nome = str(dados.get('cliente') or '').strip()

        try:
            if agendamento_id:
                self.agendamento_service.finalizar_agendamento(agendamento_id, transacao_id)

            elif cliente_nome and barbeiro_id:
                agendamento = self.agendamento_service.criar_agendamento_retroativo(
                    transacao_id=transacao_id,
                    cliente_nome=cliente_nome,
                    barbeiro_id=barbeiro_id,
                    descricao=transacao['descricao'],
                    valor=transacao['valor']
                )
                self.transacao_service.vincular_agendamento(
                    transacao,
                    agendamento['_id'],
                    f"Agendamento retroativo: {agendamento['_id']}"
                )

        except LookupMiss as e:
            logger.warning(f"[PDV] Vínculo com agendamento ignorado ({transacao_id}): {e}")
        except Exception as e:
            logger.exception(f"[PDV] Erro ao vincular agendamento da transação {transacao_id}: {e}")
            self.audit_service.log_error(
                action='vincular_agendamento',
                entity='agendamento',
                error=e,
                entity_id=agendamento_id,
                payload={'transacao_id': transacao_id, 'cliente': cliente_nome}
            )

    def _auditar_sucesso(self, action: str, transacao_id: str,
                         payload: Optional[Dict[str, Any]] = None) -> None:
        try:
            self.audit_service.log_transaction(action, transacao_id, payload=payload)
        except Exception as e:
            logger.warning(f"[PDV] Falha ao gravar audit log de {action}: {e}")
