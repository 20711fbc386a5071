"""Connectors: adapters de borda para requisições HTTP.

Estrutura:
- relay/: credencial, chave de cliente e body da submissão
"""

__all__: list[str] = []
