"""
Repository para agendamentos.

Localização: agendamentos/repositories/agendamento_repository.py

Gerencia a collection 'appointments' no MongoDB (schema em
agendamentos/models/agendamento_model.py).
"""
from typing import List, Dict, Any
from datetime import datetime
from core.repositories.base_repository import BaseRepository, to_object_id
from core.utils.datas import agora_utc
from agendamentos.models.agendamento_model import AgendamentoModel


class AgendamentoRepository(BaseRepository):

    def __init__(self, db=None):
        super().__init__('appointments', db)

    def _ensure_indexes(self):
        """
        Índices:
        - [cliente_id, data_agendamento] (desc): Histórico do cliente
        - data_agendamento: Estatísticas do dia
        """
        self.collection.create_index([('cliente_id', 1), ('data_agendamento', -1)])
        self.collection.create_index('data_agendamento')

    def find_by_cliente(self, cliente_id: Any, limit: int = 20) -> List[Dict[str, Any]]:
        """
        Agendamentos de um cliente, mais recentes primeiro.
        """
        oid = to_object_id(cliente_id)
        if oid is None:
            return []
        return self.find_many(
            query={'cliente_id': oid},
            limit=limit,
            sort=('data_agendamento', -1)
        )

    def find_no_periodo(self, start_date: datetime, end_date: datetime) -> List[Dict[str, Any]]:
        return list(self.collection.find({
            'data_agendamento': {'$gte': start_date, '$lte': end_date}
        }))

    def marcar_pago(self, agendamento_id: Any, transacao_id: Any,
                    observacoes: str) -> bool:
        """
        Marca o agendamento como realizado e pago.

        Returns:
            True se o agendamento existe
        """
        agora = agora_utc()
        return self.update(agendamento_id, {
            'status': AgendamentoModel.REALIZADO,
            'transacao_pagamento_id': to_object_id(transacao_id),
            'data_pagamento': agora,
            'observacoes': observacoes,
            'updated_at': agora
        })
