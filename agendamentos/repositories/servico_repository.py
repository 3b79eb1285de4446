"""
Repository para serviços da barbearia.

Localização: agendamentos/repositories/servico_repository.py

Schema da collection services:
{
  _id: ObjectId,
  nome: String,
  descricao: String,
  preco: Number,
  duracao_minutos: Number,
  ativo: Boolean
}
"""
from typing import List, Dict, Any
from core.repositories.base_repository import BaseRepository


class ServicoRepository(BaseRepository):

    def __init__(self, db=None):
        super().__init__('services', db)

    def _ensure_indexes(self):
        self.collection.create_index('ativo')

    def find_ativos(self) -> List[Dict[str, Any]]:
        """Serviços ativos na ordem de cadastro."""
        return self.find_many(query={'ativo': True}, limit=500, sort=('_id', 1))
