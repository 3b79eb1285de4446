"""
Services do app finance.

Localização: finance/services/

Services contêm a lógica de negócio da aplicação.
Eles:
- Orquestram chamadas a repositories
- Aplicam regras de negócio
- Validam dados
- Transformam dados entre camadas

NÃO devem acessar diretamente o MongoDB, apenas via repositories.
"""
from .transacao_service import TransacaoService
from .categoria_service import CategoriaService
from .comissao_service import ComissaoService
from .fluxo_caixa_service import FluxoCaixaService
from .historico_service import HistoricoService
from .quick_transaction_service import QuickTransactionService

__all__ = [
    'TransacaoService',
    'CategoriaService',
    'ComissaoService',
    'FluxoCaixaService',
    'HistoricoService',
    'QuickTransactionService',
]
