"""
Middleware para capturar e logar exceções não tratadas.

Localização: core/middleware/exception_logging_middleware.py

Este middleware captura exceções não tratadas e as registra no audit_log.
"""
import logging
import traceback
from core.services.audit_log_service import AuditLogService

logger = logging.getLogger(__name__)


class ExceptionLoggingMiddleware:
    """
    Middleware para capturar exceções não tratadas e logá-las.

    Deve ser adicionado após outros middlewares para capturar exceções.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        return response

    def process_exception(self, request, exception):
        """
        Processa exceções não tratadas.

        Args:
            request: Request object
            exception: Exception capturada

        Returns:
            None (deixa Django tratar a exceção normalmente)
        """
        logger.error(
            f"[EXCEPTION] {request.method} {request.path}: {exception}",
            exc_info=exception
        )

        error_trace = traceback.format_exception(
            type(exception),
            exception,
            exception.__traceback__
        )
        error_str = ''.join(error_trace[-5:])  # Últimas 5 linhas
        if len(error_str) > 1000:
            error_str = error_str[:997] + '...'

        try:
            audit_service = AuditLogService()
        except Exception as e:
            # Banco indisponível: o log acima é o único registro
            logger.warning(f"[EXCEPTION] Audit log indisponível: {e}")
            return None

        audit_service.log_error(
            action='unhandled_exception',
            entity='system',
            error=error_str,
            source='api',
            payload={
                'path': request.path,
                'method': request.method,
                'exception_type': type(exception).__name__,
                'exception_message': str(exception)
            }
        )

        return None
