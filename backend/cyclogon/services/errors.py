"""
Error taxonomy for the cyclogon services.

All service level failures derive from :class:`CyclogonError` so the
API layer can translate them into HTTP responses in one place.  The
concrete classes also inherit from the closest built-in exception so
callers that only care about ``ValueError``/``TypeError`` keep working.
"""

from __future__ import annotations


class CyclogonError(Exception):
    """Base class for every error raised by the cyclogon services."""


class InvalidGeometry(CyclogonError, ValueError):
    """A shape was constructed with a non-positive radius or fewer than 3 sides."""


class InvalidParameter(CyclogonError, ValueError):
    """A generation or export parameter is out of range (e.g. cycles <= 0)."""


class UnsupportedShape(CyclogonError, TypeError):
    """An operation received an object that is neither a polygon nor a circle."""


__all__ = [
    "CyclogonError",
    "InvalidGeometry",
    "InvalidParameter",
    "UnsupportedShape",
]
