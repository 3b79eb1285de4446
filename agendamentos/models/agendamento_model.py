"""
Modelo de Agendamento.

Localização: agendamentos/models/agendamento_model.py

Schema no MongoDB (collection appointments):
{
  _id: ObjectId,
  cliente_id: ObjectId,
  barbeiro_id: ObjectId,
  servico_id: ObjectId,
  data_agendamento: ISODate,
  valor_total: Number,
  status: String,                   # 'CONFIRMADO' | 'REALIZADO' | 'CANCELADO' | 'PENDENTE_PAGAMENTO'
  observacoes: String,
  transacao_pagamento_id: ObjectId, # preenchido quando pago pelo PDV
  data_pagamento: ISODate,
  origem: String,                   # 'PDV_RETROATIVO' para agendamentos criados pelo PDV
  created_at: ISODate,
  updated_at: ISODate
}
"""
from typing import Dict, Any, Optional
from core.repositories.base_repository import to_object_id
from core.utils.datas import agora_utc


class AgendamentoModel:

    CONFIRMADO = 'CONFIRMADO'
    REALIZADO = 'REALIZADO'
    CANCELADO = 'CANCELADO'
    PENDENTE_PAGAMENTO = 'PENDENTE_PAGAMENTO'
    STATUS = [CONFIRMADO, REALIZADO, CANCELADO, PENDENTE_PAGAMENTO]

    ORIGEM_PDV_RETROATIVO = 'PDV_RETROATIVO'
    MARCADOR_PAGO_PDV = 'Pago via PDV'

    # Status legados/alternativos gravados por outras telas
    _ALIASES_STATUS = {
        'FINALIZADO': REALIZADO,
        'CONCLUIDO': REALIZADO,
        'PENDENTE': PENDENTE_PAGAMENTO,
    }

    @classmethod
    def normalizar_status(cls, status: Optional[str]) -> str:
        """
        Normaliza o status para um dos quatro estados conhecidos.

        Desconhecido ou vazio vira CONFIRMADO.
        """
        status = (status or '').upper()
        if status in cls.STATUS:
            return status
        return cls._ALIASES_STATUS.get(status, cls.CONFIRMADO)

    @classmethod
    def create_retroativo_data(cls, cliente_id: Any, barbeiro_id: Any, servico_id: Any,
                               valor: float, transacao_id: Any,
                               observacoes: str) -> Dict[str, Any]:
        """
        Monta um agendamento já realizado para um atendimento registrado
        direto no PDV.
        """
        agora = agora_utc()
        return {
            'cliente_id': to_object_id(cliente_id),
            'barbeiro_id': to_object_id(barbeiro_id),
            'servico_id': to_object_id(servico_id),
            'data_agendamento': agora,
            'valor_total': round(float(valor), 2),
            'status': cls.REALIZADO,
            'observacoes': observacoes,
            'transacao_pagamento_id': to_object_id(transacao_id),
            'data_pagamento': agora,
            'origem': cls.ORIGEM_PDV_RETROATIVO,
            'created_at': agora,
            'updated_at': agora
        }
