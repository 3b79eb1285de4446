"""
Modelos do app agendamentos.

Localização: agendamentos/models/
"""
from .agendamento_model import AgendamentoModel

__all__ = ['AgendamentoModel']
