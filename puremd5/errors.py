"""
Exceptions raised by the digest session.

The computation itself cannot fail on well-formed input; every error here
signals caller misuse and is surfaced immediately.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class PureMD5Error(Exception):
    """Base exception for all puremd5 errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidStateError(PureMD5Error):
    """Raised when write() or finalize() is called on a finalized session."""

    def __init__(self, operation: str, state: str):
        super().__init__(
            f"Cannot {operation}() a session in state '{state}'; call reset() first",
            {"operation": operation, "state": state},
        )
        self.operation = operation
        self.state = state
