"""Router do AgentMail: agrega os endpoints do canal inbound."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.agentmail.webhook import router as webhook_router

router = APIRouter()

router.include_router(webhook_router)
