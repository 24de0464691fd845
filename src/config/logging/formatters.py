"""Formatters de logging (JSON estruturado e texto)."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "service",
    }
)

# Nomes de saída padronizados
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com os campos obrigatórios renomeados.

    Campos passados via `extra` aparecem como chaves adicionais.
    """
    format_string = " ".join(f"%({field})s" for field in sorted(REQUIRED_LOG_FIELDS))

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )


def create_text_formatter() -> logging.Formatter:
    """Cria formatter de texto simples para execução local."""
    return logging.Formatter(_TEXT_FORMAT)
