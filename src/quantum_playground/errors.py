"""Exceptions raised by :mod:`quantum_playground`.

Every error is a validation failure detected before any computation or
state change, so callers can reject the offending input and keep going.
The base class derives from :class:`ValueError` so code that already
guards numeric input with ``except ValueError`` keeps working.
"""

from __future__ import annotations


class QuantumPlaygroundError(ValueError):
    """Base class for all errors raised by the package."""


class InvalidGateError(QuantumPlaygroundError):
    """The gate identifier is not one of ``I, X, Y, Z, H, R``."""


class MissingParameterError(QuantumPlaygroundError):
    """A parametrised gate (the rotation ``R``) was applied without its angle."""


class InvalidParameterError(QuantumPlaygroundError):
    """A numeric parameter lies outside its admissible range."""


class PairStateError(QuantumPlaygroundError):
    """An entangled pair was measured before creation or after it resolved."""
