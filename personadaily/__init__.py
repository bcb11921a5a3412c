"""Persona Daily - a daily activity journal with AI-estimated growth stats."""

__version__ = "0.1.0"
