"""
Service para o fluxo de caixa.

Localização: finance/services/fluxo_caixa_service.py

Toda transação registrada no PDV gera uma movimentação OPERACIONAL no
fluxo de caixa. A transação é a fonte de verdade; a movimentação é um
espelho para relatórios e, se falhar, só fica no log.
"""
import logging
from datetime import date
from typing import Dict, Any, List, Optional
from core.services.audit_log_service import AuditLogService
from core.utils.datas import para_local, hoje_local
from finance.models.movimentacao_model import MovimentacaoModel
from finance.models.transacao_model import TransacaoModel
from finance.repositories.movimentacao_repository import MovimentacaoRepository

logger = logging.getLogger(__name__)


class FluxoCaixaService:

    def __init__(self, db=None):
        self.movimentacao_repo = MovimentacaoRepository(db)
        self.audit_service = AuditLogService(db)

    def registrar_movimentacao(self, transacao: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Espelha uma transação no fluxo de caixa.

        Args:
            transacao: Documento da transação recém gravada

        Returns:
            Dict da movimentação, ou None se a gravação falhou
        """
        try:
            tipo = (
                MovimentacaoModel.ENTRADA
                if transacao['tipo'] == TransacaoModel.RECEITA
                else MovimentacaoModel.SAIDA
            )
            data = para_local(transacao['data_transacao']).date()

            movimentacao = self.movimentacao_repo.create(
                MovimentacaoModel.create_movimentacao_data(
                    tipo=tipo,
                    valor=transacao['valor'],
                    descricao=transacao['descricao'],
                    transacao_id=transacao['_id'],
                    data=data
                )
            )
            logger.info(
                f"[FLUXO_CAIXA] {tipo} R$ {transacao['valor']:.2f} - {transacao['descricao']}"
            )
            return movimentacao

        except Exception as e:
            logger.exception(f"[FLUXO_CAIXA] Erro ao registrar movimentação: {e}")
            self.audit_service.log_error(
                action='registrar_movimentacao',
                entity='fluxo_caixa',
                error=e,
                entity_id=str(transacao.get('_id'))
            )
            return None

    def listar_movimentacoes(self, data_inicio: Optional[date] = None,
                             data_fim: Optional[date] = None) -> List[Dict[str, Any]]:
        """
        Movimentações entre duas datas locais (padrão: hoje).
        """
        data_inicio = data_inicio or hoje_local()
        data_fim = data_fim or data_inicio

        return [
            {
                'id': str(mov['_id']),
                'tipo': mov['tipo'],
                'valor': mov['valor'],
                'descricao': mov['descricao'],
                'categoria': mov['categoria'],
                'data': mov['data'],
                'status': mov['status'],
                'transacao_id': str(mov['transacao_id']) if mov.get('transacao_id') else None,
            }
            for mov in self.movimentacao_repo.find_no_periodo(
                data_inicio.isoformat(), data_fim.isoformat()
            )
        ]

    def obter_saldo(self, data_inicio: Optional[date] = None,
                    data_fim: Optional[date] = None) -> Dict[str, float]:
        """
        Totais de entradas, saídas e saldo no período (padrão: hoje).
        """
        data_inicio = data_inicio or hoje_local()
        data_fim = data_fim or data_inicio

        totais = self.movimentacao_repo.totais_no_periodo(
            data_inicio.isoformat(), data_fim.isoformat()
        )
        return {
            'total_entradas': round(totais['ENTRADA'], 2),
            'total_saidas': round(totais['SAIDA'], 2),
            'saldo': round(totais['ENTRADA'] - totais['SAIDA'], 2),
        }
