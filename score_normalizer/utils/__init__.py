"""Utility modules for Score Normalizer."""

from .store import SessionError, SessionStore

__all__ = ["SessionError", "SessionStore"]
