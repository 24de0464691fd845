"""Logging estruturado do Mailbridge.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="mailbridge")
    logger = get_logger(__name__)
    logger.info("reply_sent", extra={"to": mask_address(address)})

Todo registro carrega correlation_id e service. Corpo de email nunca
vai para log; endereços passam por mask_address.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
    create_text_formatter,
)
from config.logging.redaction import mask_address

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "create_text_formatter",
    "get_logger",
    "log_fallback",
    "mask_address",
]
