"""
Service para logs de auditoria.

Localização: core/services/audit_log_service.py

Este service gerencia a criação e consulta de logs de auditoria. É também
onde ficam registradas as falhas dos efeitos colaterais do PDV (comissão,
agendamento, fluxo de caixa), que não chegam ao usuário.
"""
from typing import Optional, Dict, Any, List
import logging
import traceback
from core.repositories.audit_log_repository import AuditLogRepository

logger = logging.getLogger(__name__)


class AuditLogService:
    """
    Service para gerenciar logs de auditoria.

    Exemplo de uso:
        service = AuditLogService()
        service.log_action(
            action='registrar_transacao',
            entity='transacao',
            entity_id='...',
            source='pdv'
        )
    """

    def __init__(self, db=None):
        self.audit_repo = AuditLogRepository(db)

    def log_action(self, action: str, entity: str,
                   source: str = 'pdv', status: str = 'success',
                   entity_id: Optional[str] = None, payload: Optional[Dict[str, Any]] = None,
                   error: Any = None) -> Dict[str, Any]:
        """
        Registra uma ação no log de auditoria.

        Args:
            action: Tipo de ação ('registrar_transacao', 'cancelar_transacao', 'error')
            entity: Entidade relacionada ('transacao', 'comissao', 'agendamento', 'system')
            source: Origem da ação ('pdv', 'api')
            status: Status da ação ('success', 'error')
            entity_id: ID da entidade (opcional)
            payload: Dados adicionais (opcional)
            error: Exception ou mensagem de erro (opcional)

        Returns:
            Dict com dados do log criado
        """
        log_data = {
            'action': action,
            'entity': entity,
            'source': source,
            'status': status,
        }

        if entity_id:
            log_data['entity_id'] = entity_id

        if payload:
            log_data['payload'] = payload

        if error:
            log_data['error'] = self._format_error(error)

        return self.audit_repo.create(log_data)

    def log_transaction(self, action: str, transaction_id: Optional[str],
                        source: str = 'pdv', status: str = 'success',
                        payload: Optional[Dict[str, Any]] = None,
                        error: Any = None) -> Dict[str, Any]:
        """
        Registra ação relacionada a transação.

        Args:
            action: 'registrar_transacao' ou 'cancelar_transacao'
            transaction_id: ID da transação
            source: Origem
            status: 'success' ou 'error'
            payload: Dados adicionais da transação
            error: Mensagem de erro
        """
        return self.log_action(
            action=action,
            entity='transacao',
            entity_id=transaction_id,
            source=source,
            status=status,
            payload=payload,
            error=error
        )

    def log_error(self, action: str, entity: str, error: Any,
                  source: str = 'pdv', entity_id: Optional[str] = None,
                  payload: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """
        Registra um erro.

        Nunca propaga: se o próprio audit log falhar, apenas loga.

        Args:
            action: Ação que causou o erro
            entity: Entidade relacionada
            error: Exception, mensagem ou stacktrace
            source: Origem
            entity_id: ID da entidade (opcional)
            payload: Dados adicionais (opcional)

        Returns:
            Dict com dados do log criado, ou None se a gravação falhou
        """
        try:
            return self.log_action(
                action=action,
                entity=entity,
                entity_id=entity_id,
                source=source,
                status='error',
                payload=payload,
                error=error
            )
        except Exception as e:
            logger.warning(f"[AUDIT] Falha ao registrar erro de {action}: {e}")
            return None

    def get_entity_logs(self, entity: str, entity_id: Optional[str] = None,
                        limit: int = 100) -> List[Dict[str, Any]]:
        """Busca logs de uma entidade."""
        return self.audit_repo.find_by_entity(entity, entity_id, limit)

    def get_errors(self, entity: Optional[str] = None,
                   limit: int = 100, skip: int = 0) -> List[Dict[str, Any]]:
        """
        Busca logs de erro.

        Args:
            entity: Entidade (opcional)
            limit: Limite de resultados
            skip: Quantidade a pular
        """
        return self.audit_repo.find_errors(entity, limit, skip)

    def _format_error(self, error: Any) -> str:
        """
        Formata erro para armazenamento (stacktrace resumido).

        Args:
            error: Exception, string ou qualquer objeto

        Returns:
            String formatada com stacktrace resumido
        """
        if isinstance(error, Exception):
            # Pega apenas as últimas 3 linhas do stacktrace
            tb_lines = traceback.format_exception(type(error), error, error.__traceback__)
            error_str = ''.join(tb_lines[-3:])
            if len(error_str) > 500:
                error_str = error_str[:497] + '...'
            return error_str
        elif isinstance(error, str):
            return error[:500] if len(error) > 500 else error
        else:
            return str(error)[:500]
