"""
Service para localizar profissionais e clientes pelo nome.

Localização: agendamentos/services/profissional_service.py

O PDV recebe nomes digitados/selecionados na tela; aqui eles viram ids.
Nome não encontrado não é erro: o chamador segue sem a referência.
"""
import logging
from typing import Optional, Dict, Any
from agendamentos.repositories.profile_repository import ProfileRepository
from agendamentos.repositories.cliente_repository import ClienteRepository

logger = logging.getLogger(__name__)


class ProfissionalService:

    def __init__(self, db=None):
        self.profile_repo = ProfileRepository(db)
        self.cliente_repo = ClienteRepository(db)

    def resolver_barbeiro(self, nome: Optional[str]) -> Optional[str]:
        """
        Retorna o id do barbeiro ativo com esse nome.

        Args:
            nome: Nome exibido do barbeiro (opcional)

        Returns:
            ID (string) ou None se não informado/não encontrado
        """
        if not nome or not nome.strip():
            return None

        barbeiro = self.profile_repo.find_barbeiro_ativo_by_nome(nome.strip())
        if not barbeiro:
            logger.info(f"[PROFISSIONAL] Barbeiro não encontrado: {nome}")
            return None

        return str(barbeiro['_id'])

    def resolver_cliente(self, nome: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Busca o cliente pelo nome exato: primeiro em clientes, depois nos
        perfis com role 'cliente'.

        Returns:
            Documento do cliente ou None
        """
        if not nome or not nome.strip():
            return None

        nome = nome.strip()
        return (
            self.cliente_repo.find_by_nome(nome)
            or self.profile_repo.find_cliente_by_nome(nome)
        )
