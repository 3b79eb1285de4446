"""
Services do app agendamentos.

Localização: agendamentos/services/
"""
from .agendamento_service import AgendamentoService
from .profissional_service import ProfissionalService
from .servico_matcher import ServicoMatcher, SubstringServicoMatcher

__all__ = ['AgendamentoService', 'ProfissionalService', 'ServicoMatcher', 'SubstringServicoMatcher']
