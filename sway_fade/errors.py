"""
Error handling for Sway Fade.

Every failure is fatal for the invocation: errors carry a structured code,
a message for the user and an optional recovery suggestion.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for Sway Fade.

    - 1100-1199: Configuration errors
    - 1400-1499: Sway IPC errors
    - 1500-1599: Target resolution errors
    """

    # Configuration errors (1100-1199)
    CONFIG_LOAD_FAILED = 1100
    INVALID_CONFIG = 1101

    # Sway IPC errors (1400-1499)
    SWAY_NOT_RUNNING = 1400
    COMMAND_REJECTED = 1401
    QUERY_FAILED = 1402
    COMMAND_NO_MATCH = 1403

    # Resolution errors (1500-1599)
    NO_OUTPUTS = 1500
    NO_CURRENT_WORKSPACE = 1501


class FadeError(Exception):
    """Base exception for sway-fade errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize fade error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class TransportError(FadeError):
    """Sway IPC communication error."""

    def __init__(
        self,
        operation: str,
        reason: str,
        code: ErrorCode = ErrorCode.COMMAND_REJECTED,
        suggestion: Optional[str] = None
    ):
        """
        Initialize transport error.

        Args:
            operation: IPC operation that failed (a command string or query name)
            reason: Reason for failure
            code: Specific IPC error code
            suggestion: Recovery suggestion
        """
        super().__init__(
            code=code,
            message=f"Sway IPC {operation} failed: {reason}",
            suggestion=suggestion or "Ensure Sway is running and IPC socket is accessible",
            context={"operation": operation, "reason": reason}
        )


class ResolutionError(FadeError):
    """No output or current workspace could be determined."""

    def __init__(self, code: ErrorCode, message: str, target: Optional[str] = None):
        context = {"target": target} if target is not None else None
        super().__init__(code=code, message=message, context=context)


class ConfigLoadError(FadeError):
    """Configuration loading error."""

    def __init__(self, file_path: str, reason: str, code: ErrorCode = ErrorCode.CONFIG_LOAD_FAILED):
        """
        Initialize configuration load error.

        Args:
            file_path: Path to configuration file
            reason: Reason for load failure
            code: Specific configuration error code
        """
        super().__init__(
            code=code,
            message=f"Failed to load configuration from {file_path}: {reason}",
            suggestion="Check file syntax and permissions",
            context={"file_path": file_path, "reason": reason}
        )
