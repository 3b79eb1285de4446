"""
Repository para configurações de comissão por barbeiro.

Localização: finance/repositories/comissao_config_repository.py

Schema da collection comissoes_config:
{
  _id: ObjectId,
  barbeiro_id: ObjectId,
  percentual: Number,       # ex.: 40 para 40%
  ativo: Boolean,
  created_at: ISODate,
  updated_at: ISODate
}
"""
from typing import Optional, List, Dict, Any
from pymongo import ReturnDocument
from core.repositories.base_repository import BaseRepository, to_object_id
from core.utils.datas import agora_utc


class ComissaoConfigRepository(BaseRepository):

    def __init__(self, db=None):
        super().__init__('comissoes_config', db)

    def _ensure_indexes(self):
        self.collection.create_index([('barbeiro_id', 1), ('ativo', 1)])

    def find_ativa_by_barbeiro(self, barbeiro_id: Any) -> Optional[Dict[str, Any]]:
        """
        Busca a configuração ativa do barbeiro.

        Returns:
            Dict da configuração ou None se não houver
        """
        oid = to_object_id(barbeiro_id)
        if oid is None:
            return None
        return self.find_one({'barbeiro_id': oid, 'ativo': True}, sort=('_id', -1))

    def find_by_barbeiro(self, barbeiro_id: Any = None) -> List[Dict[str, Any]]:
        """
        Configurações de um barbeiro (ou de todos), mais recentes primeiro.
        """
        query = {}
        if barbeiro_id:
            oid = to_object_id(barbeiro_id)
            if oid is None:
                return []
            query['barbeiro_id'] = oid
        return self.find_many(query=query, limit=0, sort=('_id', -1))

    def upsert_por_barbeiro(self, barbeiro_id: Any, percentual: float,
                            ativo: bool = True) -> Dict[str, Any]:
        """
        Cria ou atualiza a configuração do barbeiro.

        Returns:
            Dict da configuração gravada
        """
        agora = agora_utc()
        return self.collection.find_one_and_update(
            {'barbeiro_id': to_object_id(barbeiro_id)},
            {
                '$set': {'percentual': percentual, 'ativo': ativo, 'updated_at': agora},
                '$setOnInsert': {'created_at': agora},
            },
            sort=[('_id', -1)],
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
