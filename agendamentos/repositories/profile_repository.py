"""
Repository para perfis (profissionais e clientes) no MongoDB.

Localização: agendamentos/repositories/profile_repository.py

Schema da collection profiles:
{
  _id: ObjectId,
  nome: String,
  role: String,          # 'barbeiro' | 'cliente' | 'admin'
  ativo: Boolean,
  telefone: String,
  email: String
}
"""
from typing import Optional, Dict, Any
from core.repositories.base_repository import BaseRepository

ROLE_BARBEIRO = 'barbeiro'
ROLE_CLIENTE = 'cliente'


class ProfileRepository(BaseRepository):

    def __init__(self, db=None):
        super().__init__('profiles', db)

    def _ensure_indexes(self):
        self.collection.create_index([('role', 1), ('nome', 1)])

    def find_barbeiro_ativo_by_nome(self, nome: str) -> Optional[Dict[str, Any]]:
        """
        Busca um barbeiro ativo pelo nome exato.

        Havendo nomes repetidos, retorna o perfil mais antigo (menor _id).
        """
        return self.find_one(
            {'nome': nome, 'role': ROLE_BARBEIRO, 'ativo': True},
            sort=('_id', 1)
        )

    def find_cliente_by_nome(self, nome: str) -> Optional[Dict[str, Any]]:
        return self.find_one({'nome': nome, 'role': ROLE_CLIENTE}, sort=('_id', 1))
