"""
Modelo de Transação Financeira.

Localização: finance/models/transacao_model.py

Schema no MongoDB (collection transacoes_financeiras):
{
  _id: ObjectId,
  tipo: String,                 # 'RECEITA' | 'DESPESA' | 'COMISSAO'
  valor: Number,                # sempre positivo
  descricao: String,
  metodo_pagamento: String,     # 'DINHEIRO' | 'PIX' | 'CARTAO_DEBITO' | 'CARTAO_CREDITO' | null
  status: String,               # 'CONFIRMADA' | 'CANCELADA'
  data_transacao: ISODate,
  categoria_id: ObjectId,       # opcional
  barbeiro_id: ObjectId,        # opcional
  observacoes: String,          # opcional
  cliente_nome: String,         # opcional
  agendamento_id: ObjectId,     # opcional, preenchido pelo vínculo com agendamento
  transacao_origem_id: ObjectId,# só em comissões
  idempotency_key: String,      # opcional
  created_at: ISODate,
  updated_at: ISODate
}
"""
from typing import Dict, Any, Optional
from datetime import datetime
from core.repositories.base_repository import to_object_id
from core.utils.datas import agora_utc


class TransacaoModel:
    """
    Constantes e montagem de documentos de transação.
    """

    # Tipos vindos do PDV
    ENTRADA = 'ENTRADA'
    SAIDA = 'SAIDA'

    # Tipos gravados
    RECEITA = 'RECEITA'
    DESPESA = 'DESPESA'
    COMISSAO = 'COMISSAO'
    TIPOS = [RECEITA, DESPESA, COMISSAO]

    CONFIRMADA = 'CONFIRMADA'
    CANCELADA = 'CANCELADA'

    METODOS_PAGAMENTO = [
        ('DINHEIRO', 'Dinheiro'),
        ('PIX', 'PIX'),
        ('CARTAO_DEBITO', 'Cartão de Débito'),
        ('CARTAO_CREDITO', 'Cartão de Crédito'),
    ]
    METODO_PADRAO = 'DINHEIRO'

    # Rótulo exibido no histórico, derivado só do tipo
    NOMES_CATEGORIA_POR_TIPO = {
        RECEITA: 'Serviços',
        DESPESA: 'Despesas Gerais',
        COMISSAO: 'Comissões',
    }
    COR_CATEGORIA_HISTORICO = '#6B7280'

    @classmethod
    def metodos_validos(cls) -> list:
        return [codigo for codigo, _ in cls.METODOS_PAGAMENTO]

    @classmethod
    def tipo_persistido(cls, tipo_pdv: str) -> str:
        """ENTRADA -> RECEITA, SAIDA -> DESPESA."""
        return cls.RECEITA if tipo_pdv == cls.ENTRADA else cls.DESPESA

    @classmethod
    def nome_categoria_por_tipo(cls, tipo: str) -> str:
        return cls.NOMES_CATEGORIA_POR_TIPO.get(tipo, 'Outros')

    @classmethod
    def create_transacao_data(cls, tipo: str, valor: float, descricao: str,
                              metodo_pagamento: Optional[str] = None,
                              categoria_id: Any = None, barbeiro_id: Any = None,
                              observacoes: Optional[str] = None,
                              data_transacao: Optional[datetime] = None,
                              **extras) -> Dict[str, Any]:
        """
        Cria estrutura de dados de transação confirmada.

        Args:
            tipo: 'RECEITA', 'DESPESA' ou 'COMISSAO'
            valor: Valor (positivo)
            descricao: Descrição
            metodo_pagamento: Método de pagamento (opcional)
            categoria_id: ID da categoria (opcional)
            barbeiro_id: ID do barbeiro (opcional)
            observacoes: Observações (opcional)
            data_transacao: Momento da transação (None para agora)
            **extras: Campos adicionais (cliente_nome, idempotency_key, ...)

        Returns:
            Dict com dados da transação
        """
        agora = agora_utc()
        observacoes = observacoes.strip() if observacoes else None
        return {
            'tipo': tipo,
            'valor': round(abs(float(valor)), 2),
            'descricao': descricao.strip(),
            'metodo_pagamento': metodo_pagamento,
            'status': cls.CONFIRMADA,
            'data_transacao': data_transacao or agora,
            'categoria_id': to_object_id(categoria_id) if categoria_id else None,
            'barbeiro_id': to_object_id(barbeiro_id) if barbeiro_id else None,
            'observacoes': observacoes or None,
            'created_at': agora,
            'updated_at': agora,
            **{k: v for k, v in extras.items() if v is not None}
        }
