"""Pytest configuration and fixtures."""

import mongomock
import pytest

import core.database
from agendamentos.repositories.profile_repository import ROLE_BARBEIRO, ROLE_CLIENTE
from agendamentos.services import AgendamentoService
from core.services import AuditLogService
from finance.services import QuickTransactionService


@pytest.fixture
def mongo_db():
    """In-memory MongoDB database (mongomock), fresh for each test."""
    client = mongomock.MongoClient()
    yield client['test_barbearia']
    client.close()


@pytest.fixture
def app_db(mongo_db, monkeypatch):
    """Makes core.database.get_database() return the test database.

    Needed by views, which build their services without an injected db.
    """
    monkeypatch.setattr(core.database, '_database', mongo_db)
    return mongo_db


@pytest.fixture
def pdv(mongo_db):
    """QuickTransactionService wired to the test database."""
    return QuickTransactionService(db=mongo_db)


@pytest.fixture
def agendamento_service(mongo_db):
    return AgendamentoService(db=mongo_db)


@pytest.fixture
def audit_service(mongo_db):
    return AuditLogService(db=mongo_db)


@pytest.fixture
def barbeiro(mongo_db):
    """Active barber 'João Silva'."""
    doc = {'nome': 'João Silva', 'role': ROLE_BARBEIRO, 'ativo': True}
    doc['_id'] = mongo_db.profiles.insert_one(dict(doc)).inserted_id
    return doc


@pytest.fixture
def cliente(mongo_db):
    """Client 'Carlos Souza' in the clientes collection."""
    doc = {'nome': 'Carlos Souza', 'telefone': '(11) 99999-1111', 'email': 'carlos@email.com'}
    doc['_id'] = mongo_db.clientes.insert_one(dict(doc)).inserted_id
    return doc


@pytest.fixture
def cliente_perfil(mongo_db):
    """Client registered only as a profile with role 'cliente'."""
    doc = {'nome': 'Ana Lima', 'role': ROLE_CLIENTE, 'ativo': True}
    doc['_id'] = mongo_db.profiles.insert_one(dict(doc)).inserted_id
    return doc


@pytest.fixture
def servicos(mongo_db):
    """Active services, in insertion order, plus one inactive."""
    docs = [
        {'nome': 'Corte', 'descricao': 'Corte masculino', 'preco': 30.0, 'ativo': True},
        {'nome': 'Barba', 'descricao': 'Barba completa', 'preco': 20.0, 'ativo': True},
        {'nome': 'Corte + Barba', 'descricao': 'Combo', 'preco': 45.0, 'ativo': True},
        {'nome': 'Pigmentação', 'descricao': 'Desativado', 'preco': 60.0, 'ativo': False},
    ]
    for doc in docs:
        doc['_id'] = mongo_db.services.insert_one(dict(doc)).inserted_id
    return docs


def entrada(**overrides):
    """Payload of a valid PDV income."""
    dados = {
        'tipo': 'ENTRADA',
        'valor': 45.00,
        'descricao': 'Corte + Barba',
        'metodo_pagamento': 'PIX',
        'categoria': 'Serviços',
    }
    dados.update(overrides)
    return dados


def saida(**overrides):
    """Payload of a valid PDV expense."""
    dados = {
        'tipo': 'SAIDA',
        'valor': 120.00,
        'descricao': 'Compra de pomadas',
        'categoria': 'Produtos',
    }
    dados.update(overrides)
    return dados
