"""Observability – structured logging and metrics ports."""
