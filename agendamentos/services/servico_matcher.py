"""
Escolha do serviço de um atendimento a partir da descrição digitada no PDV.

Localização: agendamentos/services/servico_matcher.py

O PDV só recebe texto livre ("Corte + Barba"); para criar um agendamento
retroativo é preciso apontar um serviço cadastrado. A heurística fica atrás
de ServicoMatcher para poder ser trocada sem mexer no AgendamentoService.
"""
import unicodedata
from typing import Dict, Any, List, Optional


def normalizar_texto(texto: Optional[str]) -> str:
    """Minúsculas e sem acentos."""
    texto = unicodedata.normalize('NFKD', (texto or '').lower().strip())
    return ''.join(c for c in texto if not unicodedata.combining(c))


class ServicoMatcher:
    """
    Interface: pontua o quanto um serviço corresponde a uma descrição.

    Subclasses implementam pontuar(); escolher() fica com o serviço de maior
    pontuação positiva (o primeiro, em caso de empate) ou com o primeiro
    serviço da lista quando nenhum pontua.
    """

    def pontuar(self, descricao: str, servico: Dict[str, Any]) -> float:
        raise NotImplementedError

    def escolher(self, descricao: str,
                 servicos: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not servicos:
            return None

        melhor = None
        melhor_pontuacao = 0.0
        for servico in servicos:
            pontuacao = self.pontuar(descricao, servico)
            if pontuacao > melhor_pontuacao:
                melhor, melhor_pontuacao = servico, pontuacao

        return melhor or servicos[0]


class SubstringServicoMatcher(ServicoMatcher):
    """
    Casa quando o nome do serviço está contido na descrição ou vice-versa.

    Nomes mais longos pontuam mais, para que "Corte + Barba" ganhe de "Corte"
    quando a descrição for "Corte + Barba".
    """

    def pontuar(self, descricao: str, servico: Dict[str, Any]) -> float:
        nome = normalizar_texto(servico.get('nome'))
        desc = normalizar_texto(descricao)
        if not nome or not desc:
            return 0.0
        if nome in desc or desc in nome:
            return float(len(nome))
        return 0.0
