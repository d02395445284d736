"""Payload builders: construção de corpos de requisição para APIs externas.

Estrutura:
- sms/: TransmitSMS (send-sms)
"""

__all__: list[str] = []
