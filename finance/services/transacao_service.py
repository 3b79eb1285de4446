"""
Service para lógica de transações financeiras.

Localização: finance/services/transacao_service.py

Este service contém a lógica de negócio relacionada a transações.
Ele usa o TransacaoRepository para acessar dados, mas adiciona
validações e regras de negócio.
"""
import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Dict, Any, Optional
from pymongo.errors import PyMongoError
from core.exceptions import ValidationError, PersistenceError
from finance.models.transacao_model import TransacaoModel
from finance.repositories.transacao_repository import TransacaoRepository

logger = logging.getLogger(__name__)


def parse_valor(valor: Any) -> Optional[float]:
    """
    Converte o valor digitado no PDV para float.

    Aceita números e strings com vírgula decimal ("45,90").

    Returns:
        float ou None se não for um número finito
    """
    if valor is None or isinstance(valor, bool):
        return None
    if isinstance(valor, str):
        valor = valor.strip().replace('R$', '').strip()
        if ',' in valor:
            valor = valor.replace('.', '').replace(',', '.')
    try:
        numero = Decimal(str(valor))
    except (InvalidOperation, ValueError):
        return None

    # NaN, Infinity e valores fora do alcance de float
    if not numero.is_finite():
        return None
    resultado = float(numero)
    if math.isinf(resultado):
        return None
    return resultado


class TransacaoService:
    """
    Service para gerenciar transações financeiras.

    Exemplo de uso:
        service = TransacaoService()
        transacao = service.criar_transacao(
            tipo='RECEITA',
            valor=45.00,
            descricao='Corte + Barba',
            metodo_pagamento='PIX'
        )
    """

    def __init__(self, db=None):
        self.transacao_repo = TransacaoRepository(db)

    @staticmethod
    def validar_transacao(dados: Dict[str, Any]) -> Dict[str, Any]:
        """
        Valida os dados de uma transação do PDV sem gravar nada.

        Args:
            dados: Dict com tipo ('ENTRADA'/'SAIDA'), valor, descricao,
                metodo_pagamento e categoria

        Returns:
            Dict {'valid': bool, 'errors': [str]}
        """
        errors = []

        valor = parse_valor(dados.get('valor'))
        if valor is None or not valor > 0:
            errors.append('Valor deve ser maior que zero')

        if not str(dados.get('descricao') or '').strip():
            errors.append('Descrição é obrigatória')

        tipo = dados.get('tipo')
        if tipo not in (TransacaoModel.ENTRADA, TransacaoModel.SAIDA):
            errors.append("Tipo deve ser 'ENTRADA' ou 'SAIDA'")

        if tipo == TransacaoModel.ENTRADA:
            metodo = dados.get('metodo_pagamento')
            if not metodo:
                errors.append('Método de pagamento é obrigatório para entradas')
            elif metodo not in TransacaoModel.metodos_validos():
                errors.append('Método de pagamento inválido')

        if tipo == TransacaoModel.SAIDA and not str(dados.get('categoria') or '').strip():
            errors.append('Categoria é obrigatória para saídas')

        return {
            'valid': len(errors) == 0,
            'errors': errors
        }

    def criar_transacao(self, tipo: str, valor: Any, descricao: str,
                        metodo_pagamento: Optional[str] = None,
                        categoria_id: Optional[str] = None,
                        barbeiro_id: Optional[str] = None,
                        observacoes: Optional[str] = None,
                        **extras) -> Dict[str, Any]:
        """
        Cria uma transação confirmada.

        Args:
            tipo: 'RECEITA', 'DESPESA' ou 'COMISSAO'
            valor: Valor da transação (positivo)
            descricao: Descrição
            metodo_pagamento: Método de pagamento (opcional)
            categoria_id: ID da categoria (opcional)
            barbeiro_id: ID do barbeiro (opcional)
            observacoes: Observações (opcional)
            **extras: Campos adicionais (cliente_nome, transacao_origem_id, ...)

        Returns:
            Dict com dados da transação criada

        Raises:
            ValidationError: Se dados inválidos
            PersistenceError: Se a gravação falhar
        """
        errors = []
        if tipo not in TransacaoModel.TIPOS:
            errors.append(f"Tipo inválido: {tipo}")

        valor_num = parse_valor(valor)
        if valor_num is None or not valor_num > 0:
            errors.append('Valor deve ser maior que zero')

        if not descricao or not str(descricao).strip():
            errors.append('Descrição é obrigatória')

        if errors:
            raise ValidationError(errors)

        transacao_data = TransacaoModel.create_transacao_data(
            tipo=tipo,
            valor=valor_num,
            descricao=descricao,
            metodo_pagamento=metodo_pagamento,
            categoria_id=categoria_id,
            barbeiro_id=barbeiro_id,
            observacoes=observacoes,
            **extras
        )

        try:
            return self.transacao_repo.create(transacao_data)
        except PyMongoError as e:
            logger.error(f"[TRANSACAO] Erro ao inserir transação: {e}", exc_info=True)
            raise PersistenceError('Erro ao registrar transação') from e

    def buscar_por_idempotency_key(self, key: str) -> Optional[Dict[str, Any]]:
        return self.transacao_repo.find_by_idempotency_key(key)

    def cancelar_transacao(self, transacao_id: str) -> bool:
        """
        Cancela uma transação (o registro é mantido com status CANCELADA).

        Args:
            transacao_id: ID da transação

        Returns:
            True se a transação existe e foi cancelada

        Raises:
            PersistenceError: Se a gravação falhar
        """
        try:
            return self.transacao_repo.atualizar_status(transacao_id, TransacaoModel.CANCELADA)
        except PyMongoError as e:
            logger.error(f"[TRANSACAO] Erro ao cancelar {transacao_id}: {e}", exc_info=True)
            raise PersistenceError('Erro ao cancelar transação') from e

    def vincular_agendamento(self, transacao: Dict[str, Any], agendamento_id: Any,
                             nota: str) -> bool:
        """
        Grava o agendamento na transação e acrescenta a nota às observações.
        """
        observacoes = transacao.get('observacoes')
        observacoes = f"{observacoes}\n{nota}" if observacoes else nota
        return self.transacao_repo.vincular_agendamento(transacao['_id'], agendamento_id, observacoes)
