"""Endpoints de health check (liveness e readiness)."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from config.settings import get_base_settings, get_resend_settings, get_runtime_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    service: str
    receive: str = "AgentMail"
    send: str = "Resend"
    from_email: str = Field(alias="from")
    timestamp: str


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "failed"]
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "error": self.error}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    return HealthResponse(
        status="ok",
        service=get_base_settings().service_name,
        from_email=get_resend_settings().from_email,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check() -> JSONResponse:
    """Readiness probe: arquivos do runtime legíveis e binário resolvível."""
    runtime = get_runtime_settings()
    checks = {
        "identity_links": _check_file(runtime.identity_config_path),
        "session_registry": _check_file(runtime.session_registry_path),
        "agent_runtime": _check_binary(runtime.runtime_binary),
    }
    ready = all(check.status == "ok" for check in checks.values())
    if not ready:
        logger.warning(
            "readiness_check_failed",
            extra={"failed": [name for name, c in checks.items() if c.status != "ok"]},
        )

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {name: check.as_dict() for name, check in checks.items()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_file(path: str) -> DependencyCheck:
    if not os.path.isfile(path):
        return DependencyCheck(status="failed", error="not_found")
    if not os.access(path, os.R_OK):
        return DependencyCheck(status="failed", error="not_readable")
    return DependencyCheck(status="ok")


def _check_binary(binary: str) -> DependencyCheck:
    if shutil.which(binary) is None:
        return DependencyCheck(status="failed", error="not_found")
    return DependencyCheck(status="ok")
