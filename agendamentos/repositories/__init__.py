"""
Repositories do app agendamentos.

Localização: agendamentos/repositories/

Profissionais, clientes, serviços e agendamentos. Para o financeiro,
profissionais e serviços são somente leitura.
"""
from .agendamento_repository import AgendamentoRepository
from .cliente_repository import ClienteRepository
from .profile_repository import ProfileRepository
from .servico_repository import ServicoRepository

__all__ = [
    'AgendamentoRepository',
    'ClienteRepository',
    'ProfileRepository',
    'ServicoRepository',
]
