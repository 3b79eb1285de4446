"""
Modelos do app finance.

Localização: finance/models/

Não são models do Django ORM: apenas constantes e montagem dos documentos
gravados no MongoDB.
"""
from .transacao_model import TransacaoModel
from .categoria_model import CategoriaModel
from .movimentacao_model import MovimentacaoModel

__all__ = ['TransacaoModel', 'CategoriaModel', 'MovimentacaoModel']
