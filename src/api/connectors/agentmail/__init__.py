"""Connector AgentMail (recebimento de emails via webhook)."""
