"""
Repository para logs de auditoria no MongoDB.

Localização: core/repositories/audit_log_repository.py

Schema da collection audit_logs:
{
  _id: ObjectId,
  action: String,              // 'registrar_transacao', 'cancelar_transacao', 'calcular_comissao', 'error'
  entity: String,              // 'transacao', 'comissao', 'agendamento', 'fluxo_caixa', 'system'
  entity_id: String,           // ID da entidade (opcional)
  payload: Object,             // Dados adicionais
  source: String,              // 'pdv', 'api'
  status: String,              // 'success', 'error'
  error: String,               // Stacktrace resumido (se status = 'error')
  created_at: ISODate
}
"""
from typing import Optional, List, Dict, Any
from core.repositories.base_repository import BaseRepository
from core.utils.datas import agora_utc


class AuditLogRepository(BaseRepository):
    """
    Repository para gerenciar logs de auditoria no MongoDB.

    Exemplo de uso:
        repo = AuditLogRepository()
        log = repo.create({
            'action': 'registrar_transacao',
            'entity': 'transacao',
            'source': 'pdv',
            'status': 'success'
        })
    """

    def __init__(self, db=None):
        super().__init__('audit_logs', db)

    def _ensure_indexes(self):
        """
        Índices:
        - [entity, created_at] (desc): Histórico por entidade
        - action: Filtros por tipo de ação
        - status: Filtros por status (sucesso/erro)
        """
        self.collection.create_index([('entity', 1), ('created_at', -1)])
        self.collection.create_index('action')
        self.collection.create_index('status')

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Cria um novo log de auditoria.

        Args:
            data: Dados do log

        Returns:
            Dict com dados do log criado (incluindo _id)
        """
        if 'created_at' not in data:
            data['created_at'] = agora_utc()

        return super().create(data)

    def find_by_entity(self, entity: str, entity_id: Optional[str] = None,
                       limit: int = 100) -> List[Dict[str, Any]]:
        """
        Busca logs de uma entidade, mais recentes primeiro.

        Args:
            entity: Entidade ('transacao', 'agendamento', ...)
            entity_id: ID específico (opcional)
            limit: Limite de resultados
        """
        query = {'entity': entity}
        if entity_id:
            query['entity_id'] = entity_id

        return self.find_many(query=query, limit=limit, sort=('created_at', -1))

    def find_errors(self, entity: Optional[str] = None,
                    limit: int = 100, skip: int = 0) -> List[Dict[str, Any]]:
        """
        Busca apenas logs de erro.

        Args:
            entity: Entidade (opcional, se None busca todos)
            limit: Limite de resultados
            skip: Quantidade a pular

        Returns:
            Lista de logs de erro
        """
        query = {'status': 'error'}
        if entity:
            query['entity'] = entity

        return self.find_many(
            query=query,
            limit=limit,
            skip=skip,
            sort=('created_at', -1)
        )
