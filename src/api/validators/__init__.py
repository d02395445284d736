"""Validators: validação de dados antes de chamadas a APIs externas.

Estrutura:
- sms/: números de telefone, sender IDs, URLs de callback (SSRF) e e-mails
"""

__all__: list[str] = []
