"""
Repository para categorias financeiras no MongoDB.

Localização: finance/repositories/categoria_repository.py
"""
from typing import Optional, List, Dict, Any
from core.repositories.base_repository import BaseRepository


class CategoriaRepository(BaseRepository):
    """
    Repository para gerenciar categorias financeiras no MongoDB.
    """

    def __init__(self, db=None):
        super().__init__('categorias_financeiras', db)

    def _ensure_indexes(self):
        # Busca exata por (nome, tipo)
        self.collection.create_index([('nome', 1), ('tipo', 1)])

    def find_by_nome_tipo(self, nome: str, tipo: str) -> Optional[Dict[str, Any]]:
        """
        Busca categoria pelo nome exato e tipo.

        Args:
            nome: Nome da categoria
            tipo: 'RECEITA' ou 'DESPESA'
        """
        return self.find_one({'nome': nome, 'tipo': tipo}, sort=('_id', 1))

    def find_by_tipo(self, tipo: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Lista categorias, opcionalmente de um tipo, ordenadas por nome.
        """
        query = {'tipo': tipo} if tipo else {}
        return self.find_many(query=query, limit=500, sort=('nome', 1))
