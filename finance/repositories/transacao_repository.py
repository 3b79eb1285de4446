"""
Repository para transações financeiras.

Localização: finance/repositories/transacao_repository.py

Este repository encapsula todas as operações com a collection
'transacoes_financeiras' no MongoDB. Transações nunca são apagadas:
o cancelamento é feito pelo status.
"""
from typing import Optional, List, Dict, Any
from datetime import datetime
from core.repositories.base_repository import BaseRepository, to_object_id
from core.utils.datas import agora_utc
from finance.models.transacao_model import TransacaoModel


class TransacaoRepository(BaseRepository):
    """
    Repository para gerenciar transações financeiras no MongoDB.

    Exemplo de uso:
        repo = TransacaoRepository()
        transacao = repo.create(TransacaoModel.create_transacao_data(
            tipo='RECEITA',
            valor=45.00,
            descricao='Corte + Barba',
            metodo_pagamento='PIX'
        ))
    """

    def __init__(self, db=None):
        super().__init__('transacoes_financeiras', db)

    def _ensure_indexes(self):
        """
        Índices:
        - data_transacao (desc): Histórico recente e filtros por período
        - [barbeiro_id, data_transacao]: Histórico filtrado por barbeiro
        - [status, data_transacao]: Estatísticas do dia
        - idempotency_key: Deduplicação de reenvios do PDV
        """
        self.collection.create_index([('data_transacao', -1)])
        self.collection.create_index([('barbeiro_id', 1), ('data_transacao', -1)])
        self.collection.create_index([('status', 1), ('data_transacao', -1)])
        self.collection.create_index('idempotency_key')

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Cria uma nova transação.

        Args:
            data: Dados da transação (ver TransacaoModel)

        Returns:
            Dict com dados da transação criada (incluindo _id)

        Raises:
            ValueError: Se valor não for positivo
        """
        if float(data.get('valor') or 0) <= 0:
            raise ValueError("valor deve ser maior que zero")

        if 'data_transacao' not in data:
            data['data_transacao'] = agora_utc()

        return super().create(data)

    def find_by_idempotency_key(self, key: str) -> Optional[Dict[str, Any]]:
        return self.find_one({'idempotency_key': key})

    def find_recentes(self, limit: int = 10,
                      barbeiro_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Busca as transações mais recentes.

        Args:
            limit: Limite de resultados
            barbeiro_id: Filtra por barbeiro (opcional)

        Returns:
            Lista ordenada por data_transacao (mais recentes primeiro)
        """
        query = {}
        if barbeiro_id:
            oid = to_object_id(barbeiro_id)
            if oid is None:
                return []
            query['barbeiro_id'] = oid

        return self.find_many(query=query, limit=limit, sort=('data_transacao', -1))

    def find_confirmadas_no_periodo(self, start_date: datetime, end_date: datetime,
                                    barbeiro_id: Optional[str] = None,
                                    limit: int = 0) -> List[Dict[str, Any]]:
        """
        Busca transações confirmadas entre start_date e end_date (inclusive).

        Args:
            start_date: Início (UTC)
            end_date: Fim (UTC)
            barbeiro_id: Filtra por barbeiro (opcional)
            limit: Limite de resultados (0 para todos)

        Returns:
            Lista ordenada por data_transacao (mais recentes primeiro)
        """
        query = {
            'status': TransacaoModel.CONFIRMADA,
            'data_transacao': {'$gte': start_date, '$lte': end_date}
        }
        if barbeiro_id:
            oid = to_object_id(barbeiro_id)
            if oid is None:
                return []
            query['barbeiro_id'] = oid

        cursor = self.collection.find(query).sort('data_transacao', -1)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    def find_comissoes_no_periodo(self, barbeiro_id: Any, start_date: datetime,
                                  end_date: datetime) -> List[Dict[str, Any]]:
        """
        Comissões do barbeiro no período, de qualquer status, mais recentes primeiro.
        """
        oid = to_object_id(barbeiro_id)
        if oid is None:
            return []

        return list(self.collection.find({
            'tipo': TransacaoModel.COMISSAO,
            'barbeiro_id': oid,
            'data_transacao': {'$gte': start_date, '$lte': end_date}
        }).sort('data_transacao', -1))

    def atualizar_status(self, transacao_id: str, status: str) -> bool:
        """
        Altera o status de uma transação.

        Returns:
            True se a transação existe
        """
        return self.update(transacao_id, {
            'status': status,
            'updated_at': agora_utc()
        })

    def vincular_agendamento(self, transacao_id: Any, agendamento_id: Any,
                             observacoes: Optional[str]) -> bool:
        """Grava o agendamento vinculado e as observações atualizadas."""
        return self.update(transacao_id, {
            'agendamento_id': to_object_id(agendamento_id),
            'observacoes': observacoes,
            'updated_at': agora_utc()
        })
