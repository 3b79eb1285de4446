"""
Modelo de Categoria Financeira.

Localização: finance/models/categoria_model.py

Schema no MongoDB (collection categorias_financeiras):
{
  _id: ObjectId,
  nome: String,             # Nome da categoria
  tipo: String,             # 'RECEITA' | 'DESPESA'
  cor: String,              # Cor de exibição (#RRGGBB)
  created_at: ISODate,
  updated_at: ISODate
}
"""
import random
from typing import Dict, Any
from core.utils.datas import agora_utc


class CategoriaModel:
    """
    Modelo de dados para categorias financeiras.
    """

    # Paleta usada para categorias criadas pelo PDV
    CORES = [
        '#EF4444', '#F59E0B', '#10B981', '#3B82F6',
        '#8B5CF6', '#EC4899', '#6B7280', '#14B8A6',
    ]

    @classmethod
    def cor_aleatoria(cls) -> str:
        return random.choice(cls.CORES)

    @classmethod
    def create_categoria_data(cls, nome: str, tipo: str,
                              cor: str = None) -> Dict[str, Any]:
        """
        Cria estrutura de dados de categoria.

        Args:
            nome: Nome da categoria
            tipo: 'RECEITA' ou 'DESPESA'
            cor: Cor (None sorteia uma da paleta)

        Returns:
            Dict com dados da categoria
        """
        agora = agora_utc()
        return {
            'nome': nome.strip(),
            'tipo': tipo,
            'cor': cor or cls.cor_aleatoria(),
            'created_at': agora,
            'updated_at': agora
        }
