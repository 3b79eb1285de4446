"""
Repository base para MongoDB.

Localização: core/repositories/base_repository.py

Este é um repository base que pode ser estendido por outros repositories
para compartilhar funcionalidades comuns.
"""
from typing import Optional, Dict, Any, List
from core.database import get_database
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.database import Database


def to_object_id(value: Any) -> Optional[ObjectId]:
    """
    Converte um id (string ou ObjectId) para ObjectId.

    Returns:
        ObjectId ou None se o valor não for um id válido
    """
    if isinstance(value, ObjectId):
        return value
    if value is None:
        # ObjectId(None) gera um id novo
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class BaseRepository:
    """
    Repository base com operações CRUD comuns.

    Exemplo de uso:
        class ServicoRepository(BaseRepository):
            def __init__(self, db=None):
                super().__init__('services', db)
    """

    def __init__(self, collection_name: str, db: Optional[Database] = None):
        """
        Inicializa o repository.

        Args:
            collection_name: Nome da collection no MongoDB
            db: Database injetado (None usa core.database.get_database)
        """
        self.db = db if db is not None else get_database()
        self.collection = self.db[collection_name]
        self._ensure_indexes()

    def _ensure_indexes(self):
        """
        Cria índices necessários.
        Deve ser sobrescrito nas classes filhas.
        """
        pass

    def find_by_id(self, document_id: Any) -> Optional[Dict[str, Any]]:
        """
        Busca documento por ID.

        Args:
            document_id: ID do documento (ObjectId ou string)

        Returns:
            Dict com dados do documento ou None
        """
        oid = to_object_id(document_id)
        if oid is None:
            return None
        return self.collection.find_one({'_id': oid})

    def find_one(self, query: Dict[str, Any],
                 sort: Optional[tuple] = None) -> Optional[Dict[str, Any]]:
        """
        Busca um documento por query.

        Args:
            query: Query do MongoDB
            sort: Tupla (campo, direção) para desempate

        Returns:
            Dict com dados do documento ou None
        """
        if sort:
            return self.collection.find_one(query, sort=[sort])
        return self.collection.find_one(query)

    def find_many(self, query: Dict[str, Any] = None,
                  limit: int = 100, skip: int = 0,
                  sort: tuple = None) -> List[Dict[str, Any]]:
        """
        Busca múltiplos documentos.

        Args:
            query: Query do MongoDB (None para todos)
            limit: Limite de resultados
            skip: Quantidade a pular
            sort: Tupla (campo, direção) para ordenação

        Returns:
            Lista de documentos
        """
        cursor = self.collection.find(query or {})

        if sort:
            cursor = cursor.sort(sort[0], sort[1])

        cursor = cursor.skip(skip).limit(limit)
        return list(cursor)

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Cria um novo documento.

        Args:
            data: Dados do documento

        Returns:
            Dict com dados do documento criado (incluindo _id)
        """
        result = self.collection.insert_one(data)
        data['_id'] = result.inserted_id
        return data

    def update(self, document_id: Any, data: Dict[str, Any]) -> bool:
        """
        Atualiza um documento.

        Args:
            document_id: ID do documento
            data: Dados a atualizar

        Returns:
            True se o documento existe (mesmo que nada tenha mudado)
        """
        oid = to_object_id(document_id)
        if oid is None:
            return False
        result = self.collection.update_one({'_id': oid}, {'$set': data})
        return result.matched_count > 0

    def count(self, query: Dict[str, Any] = None) -> int:
        """
        Conta documentos.

        Args:
            query: Query do MongoDB (None para todos)

        Returns:
            Número de documentos
        """
        return self.collection.count_documents(query or {})
