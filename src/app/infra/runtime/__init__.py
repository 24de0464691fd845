"""Implementações concretas de invocação do runtime de agente."""

from app.infra.runtime.cli_runtime import CliAgentRuntime, create_cli_agent_runtime

__all__ = [
    "CliAgentRuntime",
    "create_cli_agent_runtime",
]
