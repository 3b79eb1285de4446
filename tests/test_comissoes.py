"""Tests for commission percentages per barber and the commission report."""

from datetime import timedelta

import pytest
from bson import ObjectId

from conftest import entrada
from core.exceptions import ValidationError
from core.utils.datas import agora_utc
from finance.services import ComissaoService


@pytest.fixture
def comissao_service(mongo_db):
    return ComissaoService(db=mongo_db)


def _periodo_atual():
    agora = agora_utc()
    return agora - timedelta(hours=1), agora + timedelta(hours=1)


class TestConfigurarPercentual:

    def test_configured_percentage_is_used_by_pdv(self, comissao_service, pdv, mongo_db, barbeiro):
        config = comissao_service.configurar_percentual(str(barbeiro['_id']), '50')

        assert config['percentual'] == 50.0
        assert config['ativo'] is True
        assert config['barbeiro_id'] == str(barbeiro['_id'])

        pdv.registrar_transacao(entrada(barbeiro='João Silva', valor=45))
        assert mongo_db.transacoes_financeiras.find_one({'tipo': 'COMISSAO'})['valor'] == 22.5

    def test_second_call_replaces_the_configuration(self, comissao_service, mongo_db, barbeiro):
        primeira = comissao_service.configurar_percentual(str(barbeiro['_id']), 50)
        segunda = comissao_service.configurar_percentual(str(barbeiro['_id']), 35)

        assert segunda['id'] == primeira['id']
        assert mongo_db.comissoes_config.count_documents({}) == 1
        assert comissao_service.obter_percentual(str(barbeiro['_id'])) == 35.0

    def test_inactive_configuration_falls_back_to_default(self, comissao_service, barbeiro):
        comissao_service.configurar_percentual(str(barbeiro['_id']), 70, ativo=False)

        assert comissao_service.obter_percentual(str(barbeiro['_id'])) == 40.0

    def test_configuration_is_audited(self, comissao_service, mongo_db, barbeiro):
        comissao_service.configurar_percentual(str(barbeiro['_id']), 50)

        log = mongo_db.audit_logs.find_one({'action': 'configurar_comissao'})
        assert log['entity_id'] == str(barbeiro['_id'])
        assert log['payload'] == {'percentual': 50.0, 'ativo': True}

    @pytest.mark.parametrize('percentual', [-1, 101, 'abc', None, 'Infinity'])
    def test_percentage_out_of_range(self, comissao_service, mongo_db, barbeiro, percentual):
        with pytest.raises(ValidationError) as exc:
            comissao_service.configurar_percentual(str(barbeiro['_id']), percentual)

        assert exc.value.errors == ['Percentual deve estar entre 0 e 100']
        assert mongo_db.comissoes_config.count_documents({}) == 0

    @pytest.mark.parametrize('barbeiro_id', [str(ObjectId()), 'nao-e-um-id', None])
    def test_unknown_barber(self, comissao_service, mongo_db, barbeiro_id):
        with pytest.raises(ValidationError) as exc:
            comissao_service.configurar_percentual(barbeiro_id, 50)

        assert exc.value.errors == ['Barbeiro não encontrado']
        assert mongo_db.comissoes_config.count_documents({}) == 0

    def test_client_profile_is_not_a_barber(self, comissao_service, cliente_perfil):
        with pytest.raises(ValidationError):
            comissao_service.configurar_percentual(str(cliente_perfil['_id']), 50)


class TestListarConfiguracoes:

    def test_by_barber_and_all(self, comissao_service, mongo_db, barbeiro):
        outro = mongo_db.profiles.insert_one({'nome': 'Pedro Alves', 'role': 'barbeiro', 'ativo': True}).inserted_id
        comissao_service.configurar_percentual(str(barbeiro['_id']), 50)
        comissao_service.configurar_percentual(str(outro), 30)

        do_joao = comissao_service.listar_configuracoes(str(barbeiro['_id']))

        assert [c['percentual'] for c in do_joao] == [50.0]
        assert len(comissao_service.listar_configuracoes()) == 2

    def test_malformed_barber_id(self, comissao_service, barbeiro):
        comissao_service.configurar_percentual(str(barbeiro['_id']), 50)

        assert comissao_service.listar_configuracoes('nao-e-um-id') == []


class TestRelatorioComissoes:

    def test_totals_count_confirmed_commissions_only(self, comissao_service, pdv, mongo_db, barbeiro):
        pdv.registrar_transacao(entrada(barbeiro='João Silva', valor=45))
        pdv.registrar_transacao(entrada(barbeiro='João Silva', valor=30))
        segunda = mongo_db.transacoes_financeiras.find_one({'tipo': 'COMISSAO', 'valor': 12.0})
        pdv.cancelar_transacao(str(segunda['_id']))

        relatorio = comissao_service.gerar_relatorio(str(barbeiro['_id']), *_periodo_atual())

        assert relatorio['barbeiro_nome'] == 'João Silva'
        assert relatorio['total_comissoes'] == 18.0
        assert relatorio['total_servicos'] == 1
        assert relatorio['comissoes_canceladas'] == 1
        assert relatorio['ticket_medio'] == 18.0
        assert len(relatorio['detalhes']) == 2
        assert {d['tipo'] for d in relatorio['detalhes']} == {'COMISSAO'}

    def test_other_barbers_and_periods_are_excluded(self, comissao_service, pdv, mongo_db, barbeiro):
        pdv.registrar_transacao(entrada(barbeiro='João Silva', valor=45))
        mongo_db.transacoes_financeiras.insert_many([
            {'tipo': 'COMISSAO', 'valor': 99.0, 'status': 'CONFIRMADA',
             'barbeiro_id': ObjectId(), 'data_transacao': agora_utc()},
            {'tipo': 'COMISSAO', 'valor': 77.0, 'status': 'CONFIRMADA',
             'barbeiro_id': barbeiro['_id'], 'data_transacao': agora_utc() - timedelta(days=3)},
        ])

        relatorio = comissao_service.gerar_relatorio(str(barbeiro['_id']), *_periodo_atual())

        assert relatorio['total_comissoes'] == 18.0
        assert relatorio['total_servicos'] == 1

    def test_unknown_barber_gives_empty_report(self, comissao_service):
        relatorio = comissao_service.gerar_relatorio('nao-e-um-id', *_periodo_atual())

        assert relatorio['barbeiro_nome'] == 'Barbeiro Desconhecido'
        assert relatorio['total_comissoes'] == 0
        assert relatorio['ticket_medio'] == 0
        assert relatorio['detalhes'] == []
