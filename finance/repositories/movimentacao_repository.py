"""
Repository para movimentações do fluxo de caixa.

Localização: finance/repositories/movimentacao_repository.py

Espelho das transações para os relatórios de fluxo de caixa, independente
da collection de transações.
"""
from typing import List, Dict, Any
from core.repositories.base_repository import BaseRepository


class MovimentacaoRepository(BaseRepository):

    def __init__(self, db=None):
        super().__init__('movimentacoes_fluxo_caixa', db)

    def _ensure_indexes(self):
        self.collection.create_index([('data', -1)])
        self.collection.create_index('transacao_id')

    def find_no_periodo(self, data_inicio: str, data_fim: str,
                        limit: int = 500) -> List[Dict[str, Any]]:
        """
        Busca movimentações entre duas datas locais ('YYYY-MM-DD', inclusive).
        """
        return self.find_many(
            query={'data': {'$gte': data_inicio, '$lte': data_fim}},
            limit=limit,
            sort=('data', -1)
        )

    def totais_no_periodo(self, data_inicio: str, data_fim: str) -> Dict[str, float]:
        """
        Soma entradas e saídas realizadas no período.

        Returns:
            Dict com 'ENTRADA' e 'SAIDA'
        """
        pipeline = [
            {
                '$match': {
                    'data': {'$gte': data_inicio, '$lte': data_fim},
                    'status': 'REALIZADO'
                }
            },
            {
                '$group': {
                    '_id': '$tipo',
                    'total': {'$sum': '$valor'}
                }
            }
        ]

        results = list(self.collection.aggregate(pipeline))

        return {
            'ENTRADA': sum(r['total'] for r in results if r['_id'] == 'ENTRADA'),
            'SAIDA': sum(r['total'] for r in results if r['_id'] == 'SAIDA'),
        }
