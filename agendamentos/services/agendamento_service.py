"""
Service para agendamentos vistos pelo financeiro.

Localização: agendamentos/services/agendamento_service.py

Cobre o vínculo entre o PDV e a agenda (finalizar um agendamento pago,
criar um agendamento retroativo para atendimentos sem agendamento) e as
consultas de clientes/agendamentos usadas na tela do PDV.
"""
import logging
from datetime import datetime
from typing import List, Dict, Any, Optional
from core.exceptions import LookupMiss, ValidationError
from core.utils.datas import limites_do_dia, para_local
from agendamentos.models.agendamento_model import AgendamentoModel
from agendamentos.repositories.agendamento_repository import AgendamentoRepository
from agendamentos.repositories.cliente_repository import ClienteRepository
from agendamentos.repositories.profile_repository import ProfileRepository
from agendamentos.repositories.servico_repository import ServicoRepository
from agendamentos.services.profissional_service import ProfissionalService
from agendamentos.services.servico_matcher import ServicoMatcher, SubstringServicoMatcher

logger = logging.getLogger(__name__)


def _data_local(valor):
    return para_local(valor) if isinstance(valor, datetime) else valor


class AgendamentoService:
    """
    Service para agendamentos.

    Exemplo de uso:
        service = AgendamentoService()
        service.finalizar_agendamento(agendamento_id='...', transacao_id='...')
    """

    def __init__(self, db=None, matcher: Optional[ServicoMatcher] = None):
        self.agendamento_repo = AgendamentoRepository(db)
        self.cliente_repo = ClienteRepository(db)
        self.profile_repo = ProfileRepository(db)
        self.servico_repo = ServicoRepository(db)
        self.profissional_service = ProfissionalService(db)
        self.matcher = matcher or SubstringServicoMatcher()

    def finalizar_agendamento(self, agendamento_id: str, transacao_id: str) -> Dict[str, Any]:
        """
        Marca um agendamento como realizado e pago pelo PDV.

        Args:
            agendamento_id: ID do agendamento
            transacao_id: ID da transação que pagou o agendamento

        Returns:
            Dict do agendamento atualizado

        Raises:
            LookupMiss: Se o agendamento não existe
        """
        agendamento = self.agendamento_repo.find_by_id(agendamento_id)
        if not agendamento:
            raise LookupMiss('Agendamento', agendamento_id)

        marcador = f"{AgendamentoModel.MARCADOR_PAGO_PDV} - Transação {transacao_id}"
        observacoes = agendamento.get('observacoes')
        observacoes = f"{observacoes}\n{marcador}" if observacoes else marcador

        self.agendamento_repo.marcar_pago(agendamento['_id'], transacao_id, observacoes)
        logger.info(f"[AGENDAMENTO] {agendamento_id} finalizado pela transação {transacao_id}")

        return self.agendamento_repo.find_by_id(agendamento['_id'])

    def criar_agendamento_retroativo(self, transacao_id: str, cliente_nome: str,
                                     barbeiro_id: str, descricao: str,
                                     valor: float) -> Dict[str, Any]:
        """
        Cria um agendamento já realizado para um atendimento cobrado no PDV
        sem agendamento prévio.

        Args:
            transacao_id: ID da transação registrada
            cliente_nome: Nome do cliente informado no PDV
            barbeiro_id: ID do barbeiro já resolvido
            descricao: Descrição da transação (usada para escolher o serviço)
            valor: Valor cobrado

        Returns:
            Dict do agendamento criado

        Raises:
            LookupMiss: Cliente não encontrado ou nenhum serviço ativo
        """
        cliente = self.profissional_service.resolver_cliente(cliente_nome)
        if not cliente:
            raise LookupMiss('Cliente', cliente_nome)

        servico = self.matcher.escolher(descricao, self.servico_repo.find_ativos())
        if not servico:
            raise LookupMiss('Serviço ativo')

        observacoes = (
            f"Agendamento retroativo criado pelo PDV. "
            f"Transação {transacao_id} - {descricao.strip()} - "
            f"Cliente: {cliente.get('nome', cliente_nome)} - "
            f"Serviço: {servico.get('nome', '')} - R$ {float(valor):.2f}"
        )

        agendamento = self.agendamento_repo.create(
            AgendamentoModel.create_retroativo_data(
                cliente_id=cliente['_id'],
                barbeiro_id=barbeiro_id,
                servico_id=servico['_id'],
                valor=valor,
                transacao_id=transacao_id,
                observacoes=observacoes
            )
        )
        logger.info(
            f"[AGENDAMENTO] Retroativo {agendamento['_id']} criado para a transação {transacao_id}"
        )
        return agendamento

    def buscar_clientes(self, termo: str) -> List[Dict[str, Any]]:
        """
        Busca clientes por nome, telefone ou email.

        Args:
            termo: Texto digitado (mínimo 2 caracteres)

        Returns:
            Até 10 clientes
        """
        termo = (termo or '').strip()
        if len(termo) < 2:
            return []

        return [
            {
                'id': str(cliente['_id']),
                'nome': cliente.get('nome'),
                'telefone': cliente.get('telefone'),
                'email': cliente.get('email'),
                'cadastrado_em': _data_local(cliente.get('created_at')),
            }
            for cliente in self.cliente_repo.buscar(termo, limit=10)
        ]

    def criar_cliente(self, nome: str, telefone: Optional[str] = None,
                      email: Optional[str] = None) -> Dict[str, Any]:
        """
        Cadastra um cliente.

        Raises:
            ValidationError: Se nome vazio
        """
        nome = str(nome or '').strip()
        if not nome:
            raise ValidationError("Nome do cliente é obrigatório")

        cliente = self.cliente_repo.create({
            'nome': nome,
            'telefone': str(telefone).strip() if telefone else None,
            'email': str(email).strip().lower() if email else None,
        })
        return {
            'id': str(cliente['_id']),
            'nome': cliente['nome'],
            'telefone': cliente['telefone'],
            'email': cliente['email'],
        }

    def buscar_agendamentos_cliente(self, cliente_id: str) -> List[Dict[str, Any]]:
        """
        Últimos 20 agendamentos do cliente, com nomes de cliente, serviço e
        barbeiro resolvidos.
        """
        agendamentos = self.agendamento_repo.find_by_cliente(cliente_id, limit=20)
        cliente = self.cliente_repo.find_by_id(cliente_id) if agendamentos else None

        resultado = []
        for ag in agendamentos:
            servico = self.servico_repo.find_by_id(ag['servico_id']) if ag.get('servico_id') else None
            barbeiro = self.profile_repo.find_by_id(ag['barbeiro_id']) if ag.get('barbeiro_id') else None
            resultado.append({
                'id': str(ag['_id']),
                'cliente_id': str(ag['cliente_id']),
                'cliente_nome': (cliente or {}).get('nome') or 'Cliente',
                'servico_nome': (servico or {}).get('nome') or 'Serviço',
                'barbeiro_nome': (barbeiro or {}).get('nome') or 'Barbeiro',
                'data_agendamento': _data_local(ag.get('data_agendamento')),
                'valor_total': ag.get('valor_total') or 0,
                'status': AgendamentoModel.normalizar_status(ag.get('status')),
                'observacoes': ag.get('observacoes'),
                'descricao_servico': (servico or {}).get('descricao'),
            })
        return resultado

    def obter_estatisticas_agendamentos(self) -> Dict[str, int]:
        """
        Contagem dos agendamentos de hoje por status.

        Returns:
            Dict com total_hoje, pendentes_pagamento, confirmados, realizados
        """
        inicio, fim = limites_do_dia()
        stats = {
            'total_hoje': 0,
            'pendentes_pagamento': 0,
            'confirmados': 0,
            'realizados': 0,
        }

        for ag in self.agendamento_repo.find_no_periodo(inicio, fim):
            stats['total_hoje'] += 1
            status = AgendamentoModel.normalizar_status(ag.get('status'))
            if status == AgendamentoModel.PENDENTE_PAGAMENTO:
                stats['pendentes_pagamento'] += 1
            elif status == AgendamentoModel.CONFIRMADO:
                stats['confirmados'] += 1
            elif status == AgendamentoModel.REALIZADO:
                stats['realizados'] += 1

        return stats
