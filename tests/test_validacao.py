"""Tests for PDV input validation and amount parsing."""

import pytest

from conftest import entrada, saida
from finance.services.transacao_service import TransacaoService, parse_valor


class TestParseValor:

    @pytest.mark.parametrize('bruto, esperado', [
        (45, 45.0),
        (45.5, 45.5),
        ('45.90', 45.9),
        ('45,90', 45.9),
        ('R$ 1.234,56', 1234.56),
        ('  30 ', 30.0),
    ])
    def test_accepts_numbers_and_brazilian_format(self, bruto, esperado):
        assert parse_valor(bruto) == pytest.approx(esperado)

    @pytest.mark.parametrize('bruto', [
        None, '', 'abc', True, [], {}, 'Infinity', '-Infinity', 'NaN', '1e999', float('inf'),
    ])
    def test_rejects_non_numbers(self, bruto):
        assert parse_valor(bruto) is None


class TestValidarTransacao:

    def test_valid_income(self):
        assert TransacaoService.validar_transacao(entrada()) == {'valid': True, 'errors': []}

    def test_valid_expense_without_payment_method(self):
        resultado = TransacaoService.validar_transacao(saida())
        assert resultado['valid'] is True

    def test_zero_amount(self):
        resultado = TransacaoService.validar_transacao(entrada(valor=0))
        assert resultado['valid'] is False
        assert 'Valor deve ser maior que zero' in resultado['errors']

    def test_negative_amount(self):
        resultado = TransacaoService.validar_transacao(entrada(valor=-10))
        assert 'Valor deve ser maior que zero' in resultado['errors']

    def test_blank_description(self):
        resultado = TransacaoService.validar_transacao(entrada(descricao='   '))
        assert resultado['errors'] == ['Descrição é obrigatória']

    def test_unknown_type(self):
        resultado = TransacaoService.validar_transacao(entrada(tipo='TRANSFERENCIA'))
        assert resultado['errors'] == ["Tipo deve ser 'ENTRADA' ou 'SAIDA'"]

    def test_income_requires_payment_method(self):
        resultado = TransacaoService.validar_transacao(entrada(metodo_pagamento=None))
        assert resultado['errors'] == ['Método de pagamento é obrigatório para entradas']

    def test_income_rejects_unknown_payment_method(self):
        resultado = TransacaoService.validar_transacao(entrada(metodo_pagamento='CHEQUE'))
        assert resultado['errors'] == ['Método de pagamento inválido']

    def test_expense_requires_category(self):
        resultado = TransacaoService.validar_transacao(saida(categoria=''))
        assert resultado['errors'] == ['Categoria é obrigatória para saídas']

    def test_collects_every_error(self):
        resultado = TransacaoService.validar_transacao({'tipo': 'ENTRADA', 'valor': 'x'})
        assert resultado['valid'] is False
        assert resultado['errors'] == [
            'Valor deve ser maior que zero',
            'Descrição é obrigatória',
            'Método de pagamento é obrigatório para entradas',
        ]
