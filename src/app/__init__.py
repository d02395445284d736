"""App: orquestração do envio de SMS e dos callbacks recebidos.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: registro e despacho de handlers de callback
- use_cases/: casos de uso (envio outbound)
- protocols/: contratos/interfaces
- observability/: correlation_id nos logs estruturados
- constants/: constantes da aplicação

Padrão: app executa; api adapta; utils apoia.
"""
