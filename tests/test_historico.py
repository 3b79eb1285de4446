"""Tests for PDV history, daily statistics and cash-flow reads."""

from datetime import datetime, timedelta

from bson import ObjectId

from conftest import entrada, saida
from core.utils.datas import agora_utc, hoje_local
from finance.services import FluxoCaixaService, HistoricoService


def _receita(metodo, valor=10.0, **extras):
    doc = {
        'tipo': 'RECEITA',
        'valor': valor,
        'descricao': 'Corte',
        'metodo_pagamento': metodo,
        'status': 'CONFIRMADA',
        'data_transacao': agora_utc(),
    }
    doc.update(extras)
    return doc


class TestHistoricoRecente:

    def test_most_recent_first_with_limit(self, mongo_db):
        base = agora_utc()
        mongo_db.transacoes_financeiras.insert_many([
            _receita('PIX', descricao=f'T{i}', data_transacao=base - timedelta(minutes=i))
            for i in range(5)
        ])

        historico = HistoricoService(db=mongo_db).obter_historico_recente(limite=3)

        assert [t['descricao'] for t in historico] == ['T0', 'T1', 'T2']
        assert isinstance(historico[0]['id'], str)
        assert '_id' not in historico[0]

    def test_labels_derived_from_type(self, pdv, mongo_db, barbeiro):
        pdv.registrar_transacao(saida(categoria='Aluguel'))
        pdv.registrar_transacao(entrada(barbeiro='João Silva', categoria=None))

        historico = {t['tipo']: t for t in pdv.obter_historico_recente(10)}

        assert historico['DESPESA']['categoria'] == {'nome': 'Despesas Gerais', 'cor': '#6B7280'}
        assert historico['DESPESA']['barbeiro'] is None
        # Income without category shows no label
        assert historico['RECEITA']['categoria'] is None
        assert historico['RECEITA']['barbeiro'] == {'nome': 'Barbeiro'}
        assert historico['COMISSAO']['barbeiro'] == {'nome': 'Barbeiro'}
        assert historico['COMISSAO']['categoria'] is None

    def test_income_with_category_is_labelled_services(self, pdv):
        pdv.registrar_transacao(entrada(categoria='Produtos'))

        assert pdv.obter_historico_recente(1)[0]['categoria']['nome'] == 'Serviços'

    def test_filter_by_barber(self, mongo_db):
        barbeiro_id = ObjectId()
        mongo_db.transacoes_financeiras.insert_many([
            _receita('PIX', barbeiro_id=barbeiro_id),
            _receita('PIX', barbeiro_id=ObjectId()),
            _receita('PIX'),
        ])

        historico = HistoricoService(db=mongo_db).obter_historico_recente(
            10, {'barbeiro_id': str(barbeiro_id)}
        )

        assert len(historico) == 1
        assert historico[0]['barbeiro_id'] == str(barbeiro_id)

    def test_malformed_barber_id_matches_nothing(self, mongo_db):
        mongo_db.transacoes_financeiras.insert_many([_receita('PIX'), _receita('PIX', barbeiro_id=None)])

        historico = HistoricoService(db=mongo_db).obter_historico_recente(10, {'barbeiro_id': 'nao-e-um-id'})

        assert historico == []

    def test_cancelled_transactions_are_listed(self, pdv):
        transacao_id = pdv.registrar_transacao(entrada())['transaction_id']
        pdv.cancelar_transacao(transacao_id)

        assert pdv.obter_historico_recente(10)[0]['status'] == 'CANCELADA'


class TestEstatisticasDia:

    def test_totals_of_today(self, pdv, barbeiro):
        pdv.registrar_transacao(entrada(barbeiro='João Silva', valor=45))
        pdv.registrar_transacao(entrada(valor=30, metodo_pagamento='DINHEIRO'))
        pdv.registrar_transacao(saida(valor=120))

        stats = pdv.obter_estatisticas_dia()

        assert stats['total_entradas'] == 75.0
        assert stats['total_saidas'] == 120.0
        # Commission row counts as a transaction but not as income or expense
        assert stats['numero_transacoes'] == 4

    def test_ignores_other_days(self, mongo_db):
        mongo_db.transacoes_financeiras.insert_many([
            _receita('PIX', valor=50),
            _receita('PIX', valor=999, data_transacao=agora_utc() - timedelta(days=2)),
        ])

        stats = HistoricoService(db=mongo_db).obter_estatisticas_dia()

        assert stats['total_entradas'] == 50.0
        assert stats['numero_transacoes'] == 1

    def test_empty_day(self, mongo_db):
        assert HistoricoService(db=mongo_db).obter_estatisticas_dia() == {
            'total_entradas': 0,
            'total_saidas': 0,
            'numero_transacoes': 0,
            'metodo_pagamento_mais_usado': 'DINHEIRO',
        }

    def test_most_used_method(self, mongo_db):
        mongo_db.transacoes_financeiras.insert_many([
            _receita('PIX'), _receita('PIX'), _receita('CARTAO_CREDITO'),
        ])

        stats = HistoricoService(db=mongo_db).obter_estatisticas_dia()

        assert stats['metodo_pagamento_mais_usado'] == 'PIX'

    def test_tie_goes_to_alphabetical_code(self, mongo_db):
        mongo_db.transacoes_financeiras.insert_many([
            _receita('PIX'), _receita('CARTAO_DEBITO'), _receita('PIX'), _receita('CARTAO_DEBITO'),
        ])

        stats = HistoricoService(db=mongo_db).obter_estatisticas_dia()

        assert stats['metodo_pagamento_mais_usado'] == 'CARTAO_DEBITO'

    def test_missing_method_counts_as_cash(self, mongo_db):
        mongo_db.transacoes_financeiras.insert_many([
            _receita(None), _receita(None), _receita('PIX'),
        ])

        stats = HistoricoService(db=mongo_db).obter_estatisticas_dia()

        assert stats['metodo_pagamento_mais_usado'] == 'DINHEIRO'

    def test_expenses_do_not_vote_for_method(self, mongo_db):
        despesa = _receita('CARTAO_CREDITO', tipo='DESPESA')
        mongo_db.transacoes_financeiras.insert_many([despesa, dict(despesa, _id=ObjectId()), _receita('PIX')])

        stats = HistoricoService(db=mongo_db).obter_estatisticas_dia()

        assert stats['metodo_pagamento_mais_usado'] == 'PIX'

    def test_filter_by_barber(self, pdv, mongo_db, barbeiro):
        pdv.registrar_transacao(entrada(barbeiro='João Silva', valor=45))
        pdv.registrar_transacao(entrada(valor=30))

        stats = pdv.obter_estatisticas_dia({'barbeiro_id': str(barbeiro['_id'])})

        assert stats['total_entradas'] == 45.0
        assert stats['numero_transacoes'] == 2

    def test_malformed_barber_id_matches_nothing(self, mongo_db):
        mongo_db.transacoes_financeiras.insert_many([_receita('PIX', valor=50), _receita('PIX', valor=20)])

        stats = HistoricoService(db=mongo_db).obter_estatisticas_dia({'barbeiro_id': 'nao-e-um-id'})

        assert stats['total_entradas'] == 0
        assert stats['numero_transacoes'] == 0


class TestRelatorioPdv:

    def test_period_returns_confirmed_only(self, pdv, mongo_db):
        primeiro = pdv.registrar_transacao(entrada())['transaction_id']
        segundo = pdv.registrar_transacao(saida())['transaction_id']
        pdv.cancelar_transacao(primeiro)

        agora = agora_utc()
        relatorio = pdv.obter_relatorio_pdv(agora - timedelta(hours=1), agora + timedelta(hours=1))

        assert [t['id'] for t in relatorio] == [segundo]
        assert isinstance(relatorio[0]['data_transacao'], datetime)
        assert relatorio[0]['data_transacao'].tzinfo is not None


class TestFluxoCaixa:

    def test_balance_of_the_day(self, pdv, mongo_db):
        pdv.registrar_transacao(entrada(valor=45))
        pdv.registrar_transacao(entrada(valor=30))
        pdv.registrar_transacao(saida(valor=20))

        saldo = FluxoCaixaService(db=mongo_db).obter_saldo()

        assert saldo == {'total_entradas': 75.0, 'total_saidas': 20.0, 'saldo': 55.0}

    def test_list_by_local_date(self, pdv, mongo_db):
        transacao_id = pdv.registrar_transacao(entrada())['transaction_id']
        ontem = (hoje_local() - timedelta(days=1)).isoformat()
        mongo_db.movimentacoes_fluxo_caixa.insert_one({
            'tipo': 'SAIDA', 'valor': 5.0, 'descricao': 'Ontem', 'categoria': 'OPERACIONAL',
            'data': ontem, 'status': 'REALIZADO', 'transacao_id': None,
        })

        service = FluxoCaixaService(db=mongo_db)
        hoje = service.listar_movimentacoes()

        assert len(hoje) == 1
        assert hoje[0]['transacao_id'] == transacao_id
        assert hoje[0]['data'] == hoje_local().isoformat()

        periodo = service.listar_movimentacoes(hoje_local() - timedelta(days=1), hoje_local())
        assert [m['descricao'] for m in periodo] == ['Corte + Barba', 'Ontem']

    def test_cancelling_does_not_touch_ledger(self, pdv, mongo_db):
        transacao_id = pdv.registrar_transacao(entrada(valor=45))['transaction_id']
        pdv.cancelar_transacao(transacao_id)

        assert FluxoCaixaService(db=mongo_db).obter_saldo()['total_entradas'] == 45.0
