"""
Decorator para auditoria e logging.

Localização: core/decorators/audit_log.py

Decorator para logar ações das views automaticamente. A gravação do
audit log nunca altera a resposta da view.
"""
from functools import wraps
from typing import Callable
from core.services.audit_log_service import AuditLogService
import logging
import traceback

logger = logging.getLogger(__name__)


def audit_log(action: str, entity: str, source: str = 'api'):
    """
    Decorator para logar ações automaticamente.

    Args:
        action: Tipo de ação ('criar_cliente', etc.)
        entity: Entidade relacionada ('cliente', 'agendamento', etc.)
        source: Origem ('pdv', 'api')

    Exemplo de uso:
        @audit_log(action='criar_cliente', entity='cliente')
        def _criar_cliente(request):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(request, *args, **kwargs):
            entity_id = kwargs.get('transacao_id') or kwargs.get('cliente_id')
            payload = {
                'path': request.path,
                'method': request.method,
            }

            try:
                audit_service = AuditLogService()
            except Exception as e:
                logger.warning(f"[AUDIT] Audit log indisponível para {action}: {e}")
                audit_service = None

            try:
                response = func(request, *args, **kwargs)
            except Exception:
                if audit_service is not None:
                    audit_service.log_error(
                        action=action,
                        entity=entity,
                        error=traceback.format_exc(),
                        source=source,
                        entity_id=entity_id,
                        payload=payload
                    )
                raise

            status_code = getattr(response, 'status_code', 200)
            if audit_service is not None:
                try:
                    audit_service.log_action(
                        action=action,
                        entity=entity,
                        entity_id=entity_id,
                        source=source,
                        status='success' if status_code < 400 else 'error',
                        payload={**payload, 'status_code': status_code}
                    )
                except Exception as e:
                    logger.warning(f"[AUDIT] Falha ao gravar audit log de {action}: {e}")

            return response

        return wrapper
    return decorator
