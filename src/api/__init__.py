"""API: camada de borda e adapter TransmitSMS.

Responsabilidades:
- Chamar a API REST da TransmitSMS (envio, cancelamento, saldo)
- Assinar e verificar URLs de callback
- Normalizar callbacks recebidos em DTOs internos
- Construir o corpo de send-sms com validação local

Subpastas:
- connectors/: cliente HTTP e URLs de callback assinadas
- normalizers/: query string de callback → DTOs
- payload_builders/: construção do corpo de send-sms
- validators/: telefones, países, URLs e guarda SSRF
- routes/: endpoints HTTP (health e webhooks de callback)

NÃO PODE conter: orquestração de use cases.
"""
