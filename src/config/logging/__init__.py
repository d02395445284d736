"""Configuração de logging estruturado (JSON).

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (app/bootstrap)
    configure_logging(level="INFO", service_name="transmitsms_bridge")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("sms_sent", extra={"message_id": 123, "recipients": 2})

Campos presentes em todo log: correlation_id, service, level, logger,
message, asctime. Números de telefone só entram mascarados
(mask_phone_number).
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)
from config.logging.masking import mask_phone_number, mask_recipients

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
    "mask_phone_number",
    "mask_recipients",
]
