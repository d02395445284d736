"""Connectors: adapters de borda para APIs externas.

Estrutura:
- transmitsms/: API REST TransmitSMS e callbacks assinados
"""

__all__: list[str] = []
