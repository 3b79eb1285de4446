"""
Decorators do core.

Localização: core/decorators/

Decorators para auditoria e outras funcionalidades.
"""
from .audit_log import audit_log

__all__ = ['audit_log']
