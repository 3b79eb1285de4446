"""
Conexão com o MongoDB.

Localização: core/database.py

Este módulo é o único dono do MongoClient da aplicação. Repositories e
services recebem o database explicitamente (parâmetro `db`) e só recorrem
a get_database() quando nada foi injetado, o que acontece nas views.
"""
import logging
import urllib.parse
from typing import Optional

from django.conf import settings
from pymongo import MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)

_client: Optional[MongoClient] = None
_database: Optional[Database] = None


def _build_uri() -> str:
    """
    Monta a URI de conexão a partir das settings.

    MONGO_URI tem precedência; sem ela, usa MONGO_USER/MONGO_PASS/MONGO_HOST
    no formato mongodb+srv usado em produção.
    """
    uri = getattr(settings, 'MONGO_URI', None)
    if uri:
        return uri

    user = getattr(settings, 'MONGO_USER', None)
    password = getattr(settings, 'MONGO_PASS', None)
    host = getattr(settings, 'MONGO_HOST', None)
    if user and password and host:
        return "mongodb+srv://%s:%s@%s/?retryWrites=true&w=majority" % (
            urllib.parse.quote_plus(user),
            urllib.parse.quote_plus(password),
            host,
        )

    return 'mongodb://localhost:27017'


def get_client() -> MongoClient:
    """Retorna o MongoClient compartilhado, criando na primeira chamada."""
    global _client
    if _client is None:
        _client = MongoClient(
            _build_uri(),
            serverSelectionTimeoutMS=getattr(settings, 'MONGO_TIMEOUT_MS', 5000),
        )
        logger.info("[DATABASE] MongoClient criado")
    return _client


def get_database() -> Database:
    """
    Retorna o database configurado em MONGO_DB_NAME.

    Returns:
        pymongo Database
    """
    global _database
    if _database is None:
        _database = get_client()[getattr(settings, 'MONGO_DB_NAME', 'barbearia')]
    return _database


def close_connection() -> None:
    """Fecha o MongoClient e limpa o cache (usado no shutdown e em testes)."""
    global _client, _database
    if _client is not None:
        _client.close()
        logger.info("[DATABASE] MongoClient fechado")
    _client = None
    _database = None
