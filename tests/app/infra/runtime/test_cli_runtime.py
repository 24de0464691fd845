"""Testes do runtime CLI usando o próprio interpretador como binário."""

from __future__ import annotations

import sys

import pytest

from app.infra.runtime.cli_runtime import CliAgentRuntime, create_cli_agent_runtime
from app.protocols.agent_runtime import AgentRuntimeError
from config.settings.runtime import RuntimeSettings

ECHO_ARGS = "import sys; print(' '.join(sys.argv[1:]))"


def _runtime(script: str) -> CliAgentRuntime:
    return CliAgentRuntime(sys.executable, base_args=("-c", script))


def test_build_command_passes_text_as_single_argument() -> None:
    runtime = CliAgentRuntime("openclaw")

    command = runtime.build_command("uuid-1", "linha 1\n$(rm -rf /) 'aspas'", 119.2)

    assert command == [
        "openclaw",
        "agent",
        "--session-id",
        "uuid-1",
        "--message",
        "linha 1\n$(rm -rf /) 'aspas'",
        "--timeout",
        "120",
    ]


def test_build_command_timeout_is_at_least_one_second() -> None:
    assert CliAgentRuntime("x").build_command("h", "m", 0.2)[-1] == "1"


@pytest.mark.asyncio
async def test_invoke_returns_stdout() -> None:
    output = await _runtime(ECHO_ARGS).invoke("uuid-1", "oi", 10)
    assert output.strip() == "--session-id uuid-1 --message oi --timeout 10"


@pytest.mark.asyncio
async def test_nonzero_exit_uses_stderr_as_cause() -> None:
    script = "import sys; sys.stderr.write('sessao travada'); sys.exit(3)"

    with pytest.raises(AgentRuntimeError) as exc_info:
        await _runtime(script).invoke("h", "m", 10)

    assert exc_info.value.cause == "sessao travada"
    assert exc_info.value.timed_out is False


@pytest.mark.asyncio
async def test_nonzero_exit_without_stderr_reports_code() -> None:
    with pytest.raises(AgentRuntimeError, match="código 2"):
        await _runtime("import sys; sys.exit(2)").invoke("h", "m", 10)


@pytest.mark.asyncio
async def test_timeout_kills_process() -> None:
    with pytest.raises(AgentRuntimeError) as exc_info:
        await _runtime("import time; time.sleep(5)").invoke("h", "m", 0.3)

    assert exc_info.value.timed_out is True
    assert "0.3s" in exc_info.value.cause


@pytest.mark.asyncio
async def test_missing_binary_fails_to_start() -> None:
    runtime = CliAgentRuntime("/nonexistent/mailbridge-runtime")

    with pytest.raises(AgentRuntimeError, match="Falha ao iniciar runtime"):
        await runtime.invoke("h", "m", 5)


@pytest.mark.asyncio
async def test_null_byte_in_message_fails_to_start() -> None:
    with pytest.raises(AgentRuntimeError, match="Falha ao iniciar runtime"):
        await _runtime(ECHO_ARGS).invoke("h", "a\x00b", 5)


@pytest.mark.asyncio
async def test_unexpected_stderr_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    script = "import sys; sys.stderr.write('stack trace'); print('ok')"

    with caplog.at_level("WARNING"):
        output = await _runtime(script).invoke("h", "m", 10)

    assert output.strip() == "ok"
    assert "agent_runtime_stderr" in caplog.text


@pytest.mark.asyncio
async def test_informational_stderr_is_not_logged(caplog: pytest.LogCaptureFixture) -> None:
    script = "import sys; sys.stderr.write('[info] carregando'); print('ok')"

    with caplog.at_level("WARNING"):
        await _runtime(script).invoke("h", "m", 10)

    assert "agent_runtime_stderr" not in caplog.text


def test_factory_uses_configured_binary() -> None:
    runtime = create_cli_agent_runtime(RuntimeSettings(runtime_binary="/opt/agent"))
    assert runtime.binary == "/opt/agent"
