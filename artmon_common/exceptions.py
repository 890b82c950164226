"""Common exception classes for the ART monitoring client.

Every failure of a monitoring exchange is reported as one of the four
terminal errors below. None of them is retried.
"""

from typing import Optional, Dict, Any


class ArtMonError(Exception):
    """Base exception for all monitoring client errors."""
    
    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured log output."""
        result = {"message": self.message}
        if self.code:
            result["code"] = self.code
        if self.details:
            result["details"] = self.details
        return result


class ResolutionError(ArtMonError):
    """Raised when the daemon's host/port cannot be resolved."""
    
    def __init__(self, message: str = "Address resolution failed", **kwargs):
        super().__init__(message, code="RESOLUTION_ERROR", **kwargs)


class MonitoringConnectionError(ArtMonError):
    """Raised when no resolved endpoint accepted a connection."""
    
    def __init__(self, message: str = "Failed to connect to daemon", **kwargs):
        super().__init__(message, code="CONNECTION_ERROR", **kwargs)


class TransportError(ArtMonError):
    """Raised when sending the request or receiving the reply fails."""
    
    def __init__(self, message: str = "Transport error", **kwargs):
        super().__init__(message, code="TRANSPORT_ERROR", **kwargs)


class DecodeError(ArtMonError):
    """Raised when the reply is not a well-formed JSON object."""
    
    def __init__(self, message: str = "Invalid reply from daemon", **kwargs):
        super().__init__(message, code="DECODE_ERROR", **kwargs)
