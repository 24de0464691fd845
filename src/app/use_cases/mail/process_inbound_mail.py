"""Use case do pipeline de email: resolve, classifica, despacha e responde.

Fluxo (FSM em fsm/):
    RECEIVED → RESOLVING → REJECTED (remetente desconhecido)
                         → CLASSIFIED → RESET_PATH | FORWARD_PATH
    → DISPATCHING → REPLYING | SUPPRESSING | APOLOGIZING → DONE

Assimetria entre caminhos:
- reset: falhas (sessão ausente, despacho, envio da confirmação) são apenas
  logadas; o remetente nunca recebe pedido de desculpas;
- forward: qualquer falha é capturada uma única vez e vira um email de
  desculpas com a causa; falha no envio das desculpas é logada e engolida.

Sem logs com corpo de email; endereços sempre mascarados.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.observability import record_outcome
from app.protocols.models import InboundMailResult, MailCommand
from app.services.command_interpreter import classify
from app.services.mail_envelope import build_message_envelope
from config.logging import mask_address
from config.settings.runtime import DEFAULT_CONTROL_TOKEN, DEFAULT_SUPPRESSION_SENTINEL
from fsm.manager import PipelineStateMachine, create_pipeline_fsm
from fsm.states import PipelineState
from utils.errors import SessionNotFoundError

if TYPE_CHECKING:
    from app.protocols.models import InboundMessage
    from app.protocols.reply_sender import ReplySenderProtocol
    from app.services.dispatcher import Dispatcher
    from app.services.identity_resolver import IdentityResolver
    from app.services.reply_composer import ReplyComposer
    from app.services.session_locator import SessionLocator

logger = logging.getLogger(__name__)

UNKNOWN_SENDER_ERROR = "Unknown sender"


class ProcessInboundMailUseCase:
    """Processa um email recebido do início ao fim. Nunca levanta por falha de pipeline."""

    def __init__(
        self,
        *,
        resolver: IdentityResolver,
        locator: SessionLocator,
        dispatcher: Dispatcher,
        composer: ReplyComposer,
        sender: ReplySenderProtocol,
        control_token: str = DEFAULT_CONTROL_TOKEN,
        sentinel: str = DEFAULT_SUPPRESSION_SENTINEL,
    ) -> None:
        self._resolver = resolver
        self._locator = locator
        self._dispatcher = dispatcher
        self._composer = composer
        self._sender = sender
        self._control_token = control_token
        self._sentinel = sentinel

    async def execute(
        self,
        message: InboundMessage,
        *,
        correlation_id: str = "",
    ) -> InboundMailResult:
        """Executa o pipeline para uma mensagem normalizada."""
        fsm = create_pipeline_fsm(message.message_id or "")
        self._advance(fsm, PipelineState.RESOLVING, "message_received")

        identity = self._resolver.resolve(message.sender_address)
        if identity is None:
            self._advance(fsm, PipelineState.REJECTED, "sender_unknown")
            logger.warning(
                "sender_unknown",
                extra={
                    "sender": mask_address(message.sender_address),
                    "message_id": message.message_id,
                },
            )
            record_outcome("rejected", "unknown_sender", correlation_id)
            return InboundMailResult(
                success=False,
                error=UNKNOWN_SENDER_ERROR,
                final_state=fsm.current_state.value,
            )

        self._advance(fsm, PipelineState.CLASSIFIED, "sender_resolved")
        command = classify(message, self._control_token)
        logger.info(
            "sender_resolved",
            extra={
                "identity": identity,
                "command": command.value,
                "message_id": message.message_id,
            },
        )

        if command is MailCommand.RESET:
            return await self._handle_reset(fsm, message, identity, correlation_id)
        return await self._handle_forward(fsm, message, identity, correlation_id)

    async def _handle_reset(
        self,
        fsm: PipelineStateMachine,
        message: InboundMessage,
        identity: str,
        correlation_id: str,
    ) -> InboundMailResult:
        self._advance(fsm, PipelineState.RESET_PATH, "reset_requested")
        outcome = await self._run_reset(fsm, message, identity)
        self._advance(fsm, PipelineState.DONE, outcome)
        record_outcome("reset", outcome, correlation_id)
        return InboundMailResult(
            success=True,
            user_id=identity,
            reset=True,
            final_state=fsm.current_state.value,
        )

    async def _run_reset(
        self,
        fsm: PipelineStateMachine,
        message: InboundMessage,
        identity: str,
    ) -> str:
        session_ref = self._locator.locate(identity)
        if session_ref is None:
            logger.warning(
                "reset_session_missing",
                extra={"session_key": self._locator.session_key(identity)},
            )
            return "session_missing"

        self._advance(fsm, PipelineState.DISPATCHING, "dispatch_reset")
        try:
            await self._dispatcher.dispatch_reset(session_ref)
        except Exception as exc:
            logger.error(
                "reset_dispatch_failed",
                extra={"session_key": session_ref.session_key, "error": str(exc)},
            )
            return "dispatch_failed"

        self._advance(fsm, PipelineState.REPLYING, "reset_acknowledged")
        try:
            await self._sender.send(self._composer.compose_reset_ack(message))
        except Exception as exc:
            logger.error(
                "reset_ack_send_failed",
                extra={"session_key": session_ref.session_key, "error": str(exc)},
            )
            return "ack_send_failed"
        return "acknowledged"

    async def _handle_forward(
        self,
        fsm: PipelineStateMachine,
        message: InboundMessage,
        identity: str,
        correlation_id: str,
    ) -> InboundMailResult:
        self._advance(fsm, PipelineState.FORWARD_PATH, "forward_requested")
        try:
            session_ref = self._locator.locate(identity)
            if session_ref is None:
                raise SessionNotFoundError(self._locator.session_key(identity))

            self._advance(fsm, PipelineState.DISPATCHING, "dispatch_message")
            envelope = build_message_envelope(message, identity, self._sentinel)
            reply_text = await self._dispatcher.dispatch_message(session_ref, envelope)

            reply = self._composer.compose(message, reply_text)
            if reply is None:
                self._advance(fsm, PipelineState.SUPPRESSING, "reply_suppressed")
                logger.info(
                    "reply_suppressed",
                    extra={"session_key": session_ref.session_key},
                )
                self._advance(fsm, PipelineState.DONE, "suppressed")
                record_outcome("forward", "suppressed", correlation_id)
                return InboundMailResult(
                    success=True,
                    user_id=identity,
                    has_reply=False,
                    final_state=fsm.current_state.value,
                )

            self._advance(fsm, PipelineState.REPLYING, "reply_composed")
            await self._sender.send(reply)
        except Exception as exc:
            cause = str(exc)
            logger.error(
                "forward_failed",
                extra={
                    "identity": identity,
                    "error_type": type(exc).__name__,
                    "error": cause,
                },
            )
            outcome = await self._apologize(fsm, message, cause)
            record_outcome("forward", outcome, correlation_id)
            return InboundMailResult(
                success=False,
                user_id=identity,
                error=cause,
                final_state=fsm.current_state.value,
            )

        logger.info(
            "reply_sent",
            extra={
                "identity": identity,
                "to": mask_address(reply.to),
                "reply_chars": len(reply_text),
            },
        )
        self._advance(fsm, PipelineState.DONE, "replied")
        record_outcome("forward", "replied", correlation_id)
        return InboundMailResult(
            success=True,
            user_id=identity,
            has_reply=True,
            final_state=fsm.current_state.value,
        )

    async def _apologize(
        self,
        fsm: PipelineStateMachine,
        message: InboundMessage,
        cause: str,
    ) -> str:
        self._advance(fsm, PipelineState.APOLOGIZING, "forward_failed")
        outcome = "apologized"
        try:
            await self._sender.send(self._composer.compose_apology(message, cause))
        except Exception as exc:
            logger.error(
                "apology_send_failed",
                extra={"to": mask_address(message.sender_address), "error": str(exc)},
            )
            outcome = "apology_failed"
        self._advance(fsm, PipelineState.DONE, outcome)
        return outcome

    @staticmethod
    def _advance(fsm: PipelineStateMachine, target: PipelineState, trigger: str) -> None:
        result = fsm.transition(target, trigger)
        if not result.success:
            logger.warning(
                "pipeline_transition_rejected",
                extra={
                    "message_id": fsm.message_id,
                    "target_state": target.name,
                    "reason": result.error_reason,
                },
            )
