"""
Service de leitura do PDV: histórico recente, estatísticas do dia e relatório.

Localização: finance/services/historico_service.py

Só leitura; nada aqui participa do registro de transações.
"""
from collections import Counter
from datetime import datetime
from typing import Dict, Any, List, Optional
from bson import ObjectId
from core.utils.datas import limites_do_dia, para_local
from finance.models.transacao_model import TransacaoModel
from finance.repositories.transacao_repository import TransacaoRepository


def serializar_transacao(transacao: Dict[str, Any]) -> Dict[str, Any]:
    """
    Converte o documento para um dict pronto para JSON: '_id' vira 'id',
    ObjectIds viram strings e datas UTC viram datas no fuso local.
    """
    resultado = {}
    for chave, valor in transacao.items():
        if chave == '_id':
            chave = 'id'
        if isinstance(valor, ObjectId):
            valor = str(valor)
        elif isinstance(valor, datetime):
            valor = para_local(valor)
        resultado[chave] = valor
    return resultado


class HistoricoService:
    """
    Exemplo de uso:
        service = HistoricoService()
        stats = service.obter_estatisticas_dia()
    """

    def __init__(self, db=None):
        self.transacao_repo = TransacaoRepository(db)

    def obter_historico_recente(self, limite: int = 10,
                                filtros: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Transações mais recentes primeiro.

        O rótulo de categoria exibido é derivado só do tipo da transação
        e o barbeiro aparece como 'Barbeiro', sem consultar os cadastros.

        Args:
            limite: Quantidade máxima
            filtros: {'barbeiro_id': ...} (opcional)

        Returns:
            Lista de transações serializadas
        """
        filtros = filtros or {}
        transacoes = self.transacao_repo.find_recentes(limite, filtros.get('barbeiro_id'))

        historico = []
        for transacao in transacoes:
            item = serializar_transacao(transacao)
            item['categoria'] = {
                'nome': TransacaoModel.nome_categoria_por_tipo(transacao.get('tipo')),
                'cor': TransacaoModel.COR_CATEGORIA_HISTORICO,
            } if transacao.get('categoria_id') else None
            item['barbeiro'] = {'nome': 'Barbeiro'} if transacao.get('barbeiro_id') else None
            historico.append(item)

        return historico

    def obter_estatisticas_dia(self, filtros: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Totais das transações confirmadas de hoje (fuso local).

        Args:
            filtros: {'barbeiro_id': ...} (opcional)

        Returns:
            Dict com total_entradas, total_saidas, numero_transacoes e
            metodo_pagamento_mais_usado
        """
        filtros = filtros or {}
        inicio, fim = limites_do_dia()
        transacoes = self.transacao_repo.find_confirmadas_no_periodo(
            inicio, fim, barbeiro_id=filtros.get('barbeiro_id')
        )

        total_entradas = sum(
            t.get('valor') or 0 for t in transacoes if t.get('tipo') == TransacaoModel.RECEITA
        )
        total_saidas = sum(
            t.get('valor') or 0 for t in transacoes if t.get('tipo') == TransacaoModel.DESPESA
        )

        return {
            'total_entradas': round(total_entradas, 2),
            'total_saidas': round(total_saidas, 2),
            'numero_transacoes': len(transacoes),
            'metodo_pagamento_mais_usado': self._metodo_mais_usado(transacoes),
        }

    @staticmethod
    def _metodo_mais_usado(transacoes: List[Dict[str, Any]]) -> str:
        """
        Método mais frequente entre as receitas; empate desfeito pela ordem
        alfabética do código. Sem receitas, DINHEIRO.
        """
        contagem = Counter(
            t.get('metodo_pagamento') or TransacaoModel.METODO_PADRAO
            for t in transacoes
            if t.get('tipo') == TransacaoModel.RECEITA
        )
        if not contagem:
            return TransacaoModel.METODO_PADRAO

        return min(contagem.items(), key=lambda item: (-item[1], item[0]))[0]

    def obter_relatorio_pdv(self, data_inicio: datetime, data_fim: datetime) -> List[Dict[str, Any]]:
        """
        Transações confirmadas no período, mais recentes primeiro.

        Args:
            data_inicio: Início (UTC)
            data_fim: Fim (UTC)
        """
        return [
            serializar_transacao(t)
            for t in self.transacao_repo.find_confirmadas_no_periodo(data_inicio, data_fim)
        ]
