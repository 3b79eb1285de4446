"""
Repository para clientes no MongoDB.

Localização: agendamentos/repositories/cliente_repository.py

Schema da collection clientes:
{
  _id: ObjectId,
  nome: String,
  telefone: String,
  email: String,
  created_at: ISODate
}
"""
import re
from typing import Optional, List, Dict, Any
from core.repositories.base_repository import BaseRepository
from core.utils.datas import agora_utc


class ClienteRepository(BaseRepository):

    def __init__(self, db=None):
        super().__init__('clientes', db)

    def _ensure_indexes(self):
        self.collection.create_index('nome')
        self.collection.create_index('telefone')

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if 'created_at' not in data:
            data['created_at'] = agora_utc()
        return super().create(data)

    def find_by_nome(self, nome: str) -> Optional[Dict[str, Any]]:
        """Busca cliente pelo nome exato (o mais antigo, se repetido)."""
        return self.find_one({'nome': nome}, sort=('_id', 1))

    def buscar(self, termo: str, limit: int = 10) -> List[Dict[str, Any]]:
        """
        Busca clientes cujo nome, telefone ou email contenha o termo
        (sem diferenciar maiúsculas).
        """
        padrao = {'$regex': re.escape(termo), '$options': 'i'}
        query = {'$or': [{'nome': padrao}, {'telefone': padrao}, {'email': padrao}]}
        return self.find_many(query=query, limit=limit, sort=('nome', 1))
