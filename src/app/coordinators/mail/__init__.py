"""Coordenadores do canal de email."""
