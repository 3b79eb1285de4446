"""
Service para comissões de barbeiros.

Localização: finance/services/comissao_service.py

A comissão é uma transação do tipo COMISSAO gravada depois de uma receita
com barbeiro. É um efeito colateral: se falhar, a receita continua valendo.
"""
import logging
from datetime import datetime
from typing import Dict, Any, List, Optional
from django.conf import settings
from core.exceptions import ValidationError
from core.repositories.base_repository import to_object_id
from core.utils.datas import para_local
from core.services.audit_log_service import AuditLogService
from finance.models.transacao_model import TransacaoModel
from agendamentos.repositories.profile_repository import ProfileRepository, ROLE_BARBEIRO
from finance.repositories.comissao_config_repository import ComissaoConfigRepository
from finance.repositories.transacao_repository import TransacaoRepository
from finance.services.historico_service import serializar_transacao
from finance.services.transacao_service import TransacaoService, parse_valor

logger = logging.getLogger(__name__)

PERCENTUAL_PADRAO = 40


def percentual_padrao() -> float:
    return float(getattr(settings, 'COMISSAO_PERCENTUAL_PADRAO', PERCENTUAL_PADRAO))


class ComissaoService:
    """
    Percentuais por barbeiro, cálculo automático e relatório de comissões.

    Exemplo de uso:
        service = ComissaoService()
        service.configurar_percentual(barbeiro_id, 50)
        relatorio = service.gerar_relatorio(barbeiro_id, inicio, fim)
    """

    def __init__(self, db=None):
        self.config_repo = ComissaoConfigRepository(db)
        self.transacao_repo = TransacaoRepository(db)
        self.profile_repo = ProfileRepository(db)
        self.transacao_service = TransacaoService(db)
        self.audit_service = AuditLogService(db)

    def obter_percentual(self, barbeiro_id: str) -> float:
        """
        Percentual de comissão do barbeiro (padrão quando não há configuração ativa).
        """
        config = self.config_repo.find_ativa_by_barbeiro(barbeiro_id)
        if not config or config.get('percentual') is None:
            return percentual_padrao()
        return float(config['percentual'])

    def calcular_comissao(self, transacao_id: str, barbeiro_id: str,
                          valor: float) -> Optional[Dict[str, Any]]:
        """
        Calcula e grava a comissão de uma receita.

        Args:
            transacao_id: ID da receita que gerou a comissão
            barbeiro_id: ID do barbeiro
            valor: Valor do serviço

        Returns:
            Dict da transação de comissão, ou None se algo falhou
        """
        try:
            percentual = self.obter_percentual(barbeiro_id)
            valor_comissao = round(float(valor) * percentual / 100, 2)

            comissao = self.transacao_service.criar_transacao(
                tipo=TransacaoModel.COMISSAO,
                valor=valor_comissao,
                descricao=f"Comissão {percentual:g}% - Transação {str(transacao_id)[-8:]}",
                barbeiro_id=barbeiro_id,
                observacoes=(
                    f"Comissão calculada automaticamente. "
                    f"Valor do serviço: R$ {float(valor):.2f}. "
                    f"Transação de origem: {transacao_id}"
                ),
                transacao_origem_id=to_object_id(transacao_id)
            )
            logger.info(
                f"[COMISSAO] R$ {valor_comissao:.2f} ({percentual:g}%) para o barbeiro {barbeiro_id}"
            )
            return comissao

        except Exception as e:
            logger.exception(f"[COMISSAO] Erro ao calcular comissão da transação {transacao_id}: {e}")
            self.audit_service.log_error(
                action='calcular_comissao',
                entity='comissao',
                error=e,
                entity_id=str(transacao_id),
                payload={'barbeiro_id': str(barbeiro_id), 'valor': valor}
            )
            return None

    def configurar_percentual(self, barbeiro_id: str, percentual: Any,
                              ativo: bool = True) -> Dict[str, Any]:
        """
        Define o percentual de comissão do barbeiro (cria ou substitui).

        Args:
            barbeiro_id: ID do barbeiro
            percentual: Percentual entre 0 e 100
            ativo: Se False, o barbeiro volta ao percentual padrão

        Returns:
            Dict da configuração gravada

        Raises:
            ValidationError: Barbeiro inexistente ou percentual fora de 0-100
        """
        errors = []
        barbeiro = self.profile_repo.find_by_id(barbeiro_id)
        if not barbeiro or barbeiro.get('role') != ROLE_BARBEIRO:
            errors.append('Barbeiro não encontrado')

        valor = parse_valor(percentual)
        if valor is None or valor < 0 or valor > 100:
            errors.append('Percentual deve estar entre 0 e 100')

        if errors:
            raise ValidationError(errors)

        config = self.config_repo.upsert_por_barbeiro(barbeiro['_id'], valor, bool(ativo))
        logger.info(f"[COMISSAO] Barbeiro {barbeiro_id} configurado com {valor:g}% (ativo={bool(ativo)})")

        try:
            self.audit_service.log_action(
                action='configurar_comissao',
                entity='comissao',
                entity_id=str(barbeiro['_id']),
                source='api',
                payload={'percentual': valor, 'ativo': bool(ativo)}
            )
        except Exception as e:
            logger.warning(f"[COMISSAO] Falha ao gravar audit log da configuração: {e}")

        return serializar_transacao(config)

    def listar_configuracoes(self, barbeiro_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Configurações de comissão de um barbeiro, ou de todos."""
        return [serializar_transacao(c) for c in self.config_repo.find_by_barbeiro(barbeiro_id)]

    def gerar_relatorio(self, barbeiro_id: str, data_inicio: datetime,
                        data_fim: datetime) -> Dict[str, Any]:
        """
        Relatório das comissões do barbeiro no período.

        Args:
            barbeiro_id: ID do barbeiro
            data_inicio: Início (UTC)
            data_fim: Fim (UTC)

        Returns:
            Dict com totais (só comissões confirmadas) e os detalhes de
            todas as comissões do período
        """
        barbeiro = self.profile_repo.find_by_id(barbeiro_id)
        comissoes = self.transacao_repo.find_comissoes_no_periodo(barbeiro_id, data_inicio, data_fim)

        confirmadas = [c for c in comissoes if c.get('status') == TransacaoModel.CONFIRMADA]
        total = round(sum(c.get('valor') or 0 for c in confirmadas), 2)

        return {
            'barbeiro_id': str(barbeiro_id),
            'barbeiro_nome': (barbeiro or {}).get('nome') or 'Barbeiro Desconhecido',
            'periodo': {'inicio': para_local(data_inicio), 'fim': para_local(data_fim)},
            'total_comissoes': total,
            'total_servicos': len(confirmadas),
            'comissoes_canceladas': len(comissoes) - len(confirmadas),
            'ticket_medio': round(total / len(confirmadas), 2) if confirmadas else 0,
            'detalhes': [serializar_transacao(c) for c in comissoes],
        }
