"""
Services do core.

Localização: core/services/

Services de infraestrutura compartilhados pelos apps.
"""
from .audit_log_service import AuditLogService

__all__ = ['AuditLogService']
