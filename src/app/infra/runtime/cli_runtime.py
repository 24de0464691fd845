"""Runtime de agente via CLI (subprocesso).

Executa `<binário> agent --session-id <handle> --message <texto> --timeout <s>`
e devolve o stdout. Os argumentos vão como lista para o processo, sem shell,
então o texto do email não precisa de escape.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import math
import os
from typing import TYPE_CHECKING

from app.protocols.agent_runtime import AgentRuntimeError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from config.settings import RuntimeSettings

logger = logging.getLogger(__name__)

# Linhas de stderr do runtime que são apenas diagnóstico
_INFORMATIONAL_STDERR_MARKERS = ("info", "warn")
_MAX_LOGGED_STDERR = 500


class CliAgentRuntime:
    """Invoca o runtime de agente como subprocesso.

    Args:
        binary: Executável do runtime (ex: "openclaw")
        base_args: Subcomando inserido antes das flags (padrão: "agent")
        env: Variáveis extras mescladas ao ambiente do processo
    """

    def __init__(
        self,
        binary: str,
        *,
        base_args: Sequence[str] = ("agent",),
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._binary = binary
        self._base_args = tuple(base_args)
        self._env = dict(env or {})

    @property
    def binary(self) -> str:
        return self._binary

    def build_command(
        self,
        session_handle: str,
        message: str,
        timeout_seconds: float,
    ) -> list[str]:
        """Monta argv da invocação."""
        return [
            self._binary,
            *self._base_args,
            "--session-id",
            session_handle,
            "--message",
            message,
            "--timeout",
            str(max(1, math.ceil(timeout_seconds))),
        ]

    async def invoke(
        self,
        session_handle: str,
        message: str,
        timeout_seconds: float,
    ) -> str:
        """Envia mensagem ao runtime e aguarda a saída textual.

        Raises:
            AgentRuntimeError: Falha ao iniciar, exit code != 0 ou timeout.
        """
        command = self.build_command(session_handle, message, timeout_seconds)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env={**os.environ, **self._env},
            )
        except (OSError, ValueError) as exc:
            raise AgentRuntimeError(f"Falha ao iniciar runtime: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout_seconds,
            )
        except TimeoutError:
            await _terminate(process)
            raise AgentRuntimeError(
                f"Runtime não respondeu em {timeout_seconds:g}s",
                timed_out=True,
            ) from None

        stderr_text = stderr.decode("utf-8", errors="replace").strip()
        if process.returncode != 0:
            raise AgentRuntimeError(
                stderr_text or f"Runtime saiu com código {process.returncode}"
            )

        if stderr_text and not _is_informational(stderr_text):
            logger.warning(
                "agent_runtime_stderr",
                extra={"stderr": stderr_text[:_MAX_LOGGED_STDERR]},
            )

        return stdout.decode("utf-8", errors="replace")


def _is_informational(stderr_text: str) -> bool:
    lowered = stderr_text.lower()
    return any(marker in lowered for marker in _INFORMATIONAL_STDERR_MARKERS)


async def _terminate(process: asyncio.subprocess.Process) -> None:
    with contextlib.suppress(ProcessLookupError):
        process.kill()
    await process.wait()


def create_cli_agent_runtime(settings: RuntimeSettings | None = None) -> CliAgentRuntime:
    """Factory com binário vindo das settings (carrega do ambiente se None)."""
    from config.settings import get_runtime_settings

    runtime = settings or get_runtime_settings()
    return CliAgentRuntime(runtime.runtime_binary)
