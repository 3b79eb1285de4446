"""
Repositories do core.

Localização: core/repositories/

Repositories são a camada de acesso a dados (Data Access Layer).
Eles encapsulam todas as operações com MongoDB, isolando a lógica de acesso
a dados do resto da aplicação.

Estrutura:
- Cada repository representa uma collection do MongoDB
- Métodos CRUD básicos (create, read, update; nada é apagado)
- Queries específicas do domínio
- Validações básicas de dados
"""
from .base_repository import BaseRepository, to_object_id
from .audit_log_repository import AuditLogRepository

__all__ = ['BaseRepository', 'to_object_id', 'AuditLogRepository']
