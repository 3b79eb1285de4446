"""
Exceções de domínio.

Localização: core/exceptions.py

- ValidationError: dados de entrada inválidos, detectados antes de qualquer escrita
- LookupMiss: categoria/barbeiro/cliente/serviço/agendamento não encontrado
- PersistenceError: falha ao gravar no MongoDB
"""
from typing import List, Optional


class ValidationError(ValueError):
    """Dados inválidos. `errors` guarda todas as mensagens encontradas."""

    def __init__(self, errors: List[str]):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(', '.join(self.errors))


class LookupMiss(LookupError):
    """Registro referenciado não existe."""

    def __init__(self, entity: str, reference: Optional[str] = None):
        self.entity = entity
        self.reference = reference
        message = f"{entity} não encontrado"
        if reference:
            message = f"{message}: {reference}"
        super().__init__(message)


class PersistenceError(RuntimeError):
    """Falha de escrita no banco."""
