"""
Service para categorias financeiras.

Localização: finance/services/categoria_service.py
"""
import logging
from typing import List, Dict, Any, Optional
from pymongo.errors import PyMongoError
from finance.repositories.categoria_repository import CategoriaRepository
from finance.models.categoria_model import CategoriaModel

logger = logging.getLogger(__name__)


class CategoriaService:
    """
    Service para categorias financeiras.
    """

    def __init__(self, db=None):
        self.categoria_repo = CategoriaRepository(db)

    def resolver_categoria(self, nome: Optional[str], tipo: str) -> Optional[str]:
        """
        Busca a categoria (nome, tipo) e cria com uma cor sorteada se não existir.

        Falhas do banco não interrompem o PDV: a transação segue sem categoria.

        Args:
            nome: Nome da categoria
            tipo: 'RECEITA' ou 'DESPESA'

        Returns:
            ID da categoria (string) ou None
        """
        if not nome or not nome.strip():
            return None

        nome = nome.strip()
        try:
            categoria = self.categoria_repo.find_by_nome_tipo(nome, tipo)
            if categoria:
                return str(categoria['_id'])

            categoria = self.categoria_repo.create(
                CategoriaModel.create_categoria_data(nome=nome, tipo=tipo)
            )
            logger.info(f"[CATEGORIA] Criada categoria '{nome}' ({tipo})")
            return str(categoria['_id'])

        except PyMongoError as e:
            logger.error(f"[CATEGORIA] Erro ao resolver categoria '{nome}': {e}", exc_info=True)
            return None

    def listar_categorias(self, tipo: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Lista categorias cadastradas, opcionalmente de um tipo.
        """
        return [
            {
                'id': str(cat['_id']),
                'nome': cat['nome'],
                'tipo': cat['tipo'],
                'cor': cat.get('cor'),
            }
            for cat in self.categoria_repo.find_by_tipo(tipo)
        ]
