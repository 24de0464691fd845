"""Leitura de arquivos JSON mantidos pelo runtime de agente."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from utils.errors import StoreUnavailableError


def read_json_file(path: str | Path) -> Any:
    """Lê e decodifica um arquivo JSON.

    Raises:
        StoreUnavailableError: Arquivo ausente, ilegível ou JSON inválido.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StoreUnavailableError(f"{file_path}: {exc.strerror or exc}") from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StoreUnavailableError(f"{file_path}: invalid_json") from exc
