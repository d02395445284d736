"""Settings específicas de SMS (TransmitSMS).

Configurações do cliente da API e dos webhooks de callback (DLR, reply,
link hits). Variáveis de ambiente com prefixo TRANSMITSMS_.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from api.validators.sms import is_supported, is_valid_sender_id, is_valid_url
from app.constants.sms import CallbackType

# URLs base da API
TRANSMITSMS_SMS_BASE_URL: str = "https://api.transmitsms.com"
TRANSMITSMS_MMS_BASE_URL: str = "https://api.transmitmessage.com"

DEFAULT_WEBHOOKS_PREFIX: str = "webhooks/transmitsms"


@dataclass(frozen=True)
class TransmitSmsSettings:
    """Configurações do canal SMS via TransmitSMS.

    Attributes:
        api_key: API key (usuário da autenticação básica)
        api_secret: API secret (senha da autenticação básica)
        base_url: URL base da API (SMS ou MMS)
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em 429/5xx
        backoff_base_seconds: Base do backoff exponencial
        backoff_max_seconds: Teto do backoff
        default_from: Sender ID padrão (VMN ou alfanumérico)
        default_country_code: País padrão para formatar números locais
        webhooks_enabled: Monta as rotas de callback
        webhooks_prefix: Prefixo das rotas de callback
        public_base_url: URL pública onde o serviço recebe callbacks
        signing_key: Chave HMAC das URLs de callback
        dlr_enabled: Rota /dlr ativa
        reply_enabled: Rota /reply ativa
        link_hits_enabled: Rota /link-hits ativa
        dlr_path: Segmento da rota de DLR
        reply_path: Segmento da rota de reply
        link_hits_path: Segmento da rota de link hits
        dns_timeout_seconds: Timeout da resolução DNS na guarda SSRF
    """

    # Credenciais
    api_key: str = ""
    api_secret: str = ""

    # API
    base_url: str = TRANSMITSMS_SMS_BASE_URL

    # Timeouts e retries
    request_timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 30.0

    # Defaults de envio
    default_from: str = ""
    default_country_code: str = ""

    # Webhooks
    webhooks_enabled: bool = True
    webhooks_prefix: str = DEFAULT_WEBHOOKS_PREFIX
    public_base_url: str = ""
    signing_key: str = ""
    dlr_enabled: bool = True
    reply_enabled: bool = True
    link_hits_enabled: bool = True
    dlr_path: str = CallbackType.DLR.path
    reply_path: str = CallbackType.REPLY.path
    link_hits_path: str = CallbackType.LINK_HITS.path

    # Guarda SSRF
    dns_timeout_seconds: float = 0.5

    @property
    def callback_base_url(self) -> str:
        """URL base dos callbacks (public_base_url + prefixo)."""
        if not self.public_base_url:
            return ""
        prefix = self.webhooks_prefix.strip("/")
        return f"{self.public_base_url.rstrip('/')}/{prefix}"

    @property
    def callback_paths(self) -> dict[CallbackType, str]:
        """Segmento de rota por tipo de callback (sem barras nas pontas).

        Compartilhado pelas rotas de webhook e pelo CallbackUrlBuilder.
        """
        return {
            CallbackType.DLR: self.dlr_path.strip("/"),
            CallbackType.REPLY: self.reply_path.strip("/"),
            CallbackType.LINK_HITS: self.link_hits_path.strip("/"),
        }

    def validate(self) -> list[str]:
        """Valida configurações mínimas de TransmitSMS.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_key:
            errors.append("TRANSMITSMS_API_KEY não configurado")

        if not self.api_secret:
            errors.append("TRANSMITSMS_API_SECRET não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("TRANSMITSMS_TIMEOUT deve ser > 0")

        if self.max_retries < 0:
            errors.append("TRANSMITSMS_MAX_RETRIES deve ser >= 0")

        if self.webhooks_enabled and not self.signing_key:
            errors.append("TRANSMITSMS_SIGNING_KEY obrigatório com webhooks ativos")

        if self.public_base_url and not is_valid_url(self.public_base_url):
            errors.append(f"TRANSMITSMS_PUBLIC_BASE_URL inválida: {self.public_base_url}")

        if self.default_from and not is_valid_sender_id(self.default_from):
            errors.append(f"TRANSMITSMS_FROM inválido: {self.default_from}")

        if self.default_country_code and not is_supported(self.default_country_code):
            errors.append(
                f"TRANSMITSMS_DEFAULT_COUNTRY_CODE desconhecido: {self.default_country_code}"
            )

        paths = self.callback_paths
        for callback_type, path in paths.items():
            if not path:
                errors.append(f"TRANSMITSMS_{callback_type.name}_PATH não pode ser vazio")
        if len(set(paths.values())) != len(paths):
            errors.append("TRANSMITSMS_*_PATH devem ser distintos entre os tipos de callback")

        return errors


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _load_from_env() -> TransmitSmsSettings:
    """Carrega TransmitSmsSettings a partir de variáveis de ambiente."""
    return TransmitSmsSettings(
        api_key=os.getenv("TRANSMITSMS_API_KEY", ""),
        api_secret=os.getenv("TRANSMITSMS_API_SECRET", ""),
        base_url=os.getenv("TRANSMITSMS_BASE_URL", TRANSMITSMS_SMS_BASE_URL),
        request_timeout_seconds=float(os.getenv("TRANSMITSMS_TIMEOUT", "30")),
        max_retries=int(os.getenv("TRANSMITSMS_MAX_RETRIES", "3")),
        backoff_base_seconds=float(os.getenv("TRANSMITSMS_BACKOFF_BASE_SECONDS", "1")),
        backoff_max_seconds=float(os.getenv("TRANSMITSMS_BACKOFF_MAX_SECONDS", "30")),
        default_from=os.getenv("TRANSMITSMS_FROM", ""),
        default_country_code=os.getenv("TRANSMITSMS_DEFAULT_COUNTRY_CODE", ""),
        webhooks_enabled=_env_bool("TRANSMITSMS_WEBHOOKS_ENABLED", "true"),
        webhooks_prefix=os.getenv("TRANSMITSMS_WEBHOOKS_PREFIX", DEFAULT_WEBHOOKS_PREFIX),
        public_base_url=os.getenv("TRANSMITSMS_PUBLIC_BASE_URL", ""),
        signing_key=os.getenv("TRANSMITSMS_SIGNING_KEY", ""),
        dlr_enabled=_env_bool("TRANSMITSMS_DLR_ENABLED", "true"),
        reply_enabled=_env_bool("TRANSMITSMS_REPLY_ENABLED", "true"),
        link_hits_enabled=_env_bool("TRANSMITSMS_LINK_HITS_ENABLED", "true"),
        dlr_path=os.getenv("TRANSMITSMS_DLR_PATH", CallbackType.DLR.path),
        reply_path=os.getenv("TRANSMITSMS_REPLY_PATH", CallbackType.REPLY.path),
        link_hits_path=os.getenv("TRANSMITSMS_LINK_HITS_PATH", CallbackType.LINK_HITS.path),
        dns_timeout_seconds=float(os.getenv("TRANSMITSMS_DNS_TIMEOUT_SECONDS", "0.5")),
    )


@lru_cache(maxsize=1)
def get_transmitsms_settings() -> TransmitSmsSettings:
    """Retorna instância cacheada de TransmitSmsSettings."""
    return _load_from_env()
