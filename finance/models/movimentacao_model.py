"""
Modelo de Movimentação do Fluxo de Caixa.

Localização: finance/models/movimentacao_model.py

Schema no MongoDB (collection movimentacoes_fluxo_caixa):
{
  _id: ObjectId,
  tipo: String,             # 'ENTRADA' | 'SAIDA'
  valor: Number,            # sempre positivo
  descricao: String,
  categoria: String,        # 'OPERACIONAL' para tudo que vem do PDV
  data: String,             # data local 'YYYY-MM-DD'
  status: String,           # 'REALIZADO'
  transacao_id: ObjectId,
  created_at: ISODate
}
"""
from typing import Dict, Any, Optional
from datetime import date
from core.repositories.base_repository import to_object_id
from core.utils.datas import agora_utc, hoje_local


class MovimentacaoModel:

    ENTRADA = 'ENTRADA'
    SAIDA = 'SAIDA'

    OPERACIONAL = 'OPERACIONAL'
    REALIZADO = 'REALIZADO'

    @classmethod
    def create_movimentacao_data(cls, tipo: str, valor: float, descricao: str,
                                 transacao_id: Any,
                                 data: Optional[date] = None) -> Dict[str, Any]:
        return {
            'tipo': tipo,
            'valor': round(abs(float(valor)), 2),
            'descricao': descricao.strip(),
            'categoria': cls.OPERACIONAL,
            'data': (data or hoje_local()).isoformat(),
            'status': cls.REALIZADO,
            'transacao_id': to_object_id(transacao_id),
            'created_at': agora_utc()
        }
