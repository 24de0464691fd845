"""Rotas do canal inbound AgentMail."""
