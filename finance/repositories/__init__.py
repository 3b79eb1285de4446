"""
Repositories do app finance.

Localização: finance/repositories/

Repositories específicos para o domínio financeiro.
Cada repository representa uma collection relacionada a finanças.
"""
from .transacao_repository import TransacaoRepository
from .categoria_repository import CategoriaRepository
from .comissao_config_repository import ComissaoConfigRepository
from .movimentacao_repository import MovimentacaoRepository

__all__ = [
    'TransacaoRepository',
    'CategoriaRepository',
    'ComissaoConfigRepository',
    'MovimentacaoRepository',
]
