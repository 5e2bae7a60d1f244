"""
Exceptions raised by the rollout engine.

Unknown features and unknown groups are never errors; these cover the
cases where the engine cannot give a trustworthy answer.
"""
from typing import Optional


class RolloutError(Exception):
    """Base exception for the rollout engine."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class CorruptStateError(RolloutError):
    """Raised when a persisted feature record cannot be decoded."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            f"Corrupt feature record at {key}: {reason}",
            details={"key": key, "reason": reason},
        )
        self.key = key


class StorageUnavailableError(RolloutError):
    """Raised when the key-value store fails to answer."""

    def __init__(self, operation: str, key: Optional[str] = None, reason: Optional[str] = None):
        super().__init__(
            f"Storage unavailable during {operation}" + (f" of {key}" if key else ""),
            details={"operation": operation, "key": key, "reason": reason},
        )
        self.operation = operation
        self.key = key
