"""
Custom exception classes for the allocate command and its services.
"""
from typing import Optional


class QCloudAPIError(Exception):
    """Exception raised when a QCloud API request cannot be completed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
        action: Optional[str] = None
    ):
        """
        Initialize QCloud API error.

        Args:
            message: Error message
            status_code: HTTP status code if a response was received
            response_text: Raw response body if available
            action: API action name if available
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_text = response_text
        self.action = action


class CredentialsError(ValueError):
    """Exception raised when QCloud credentials cannot be resolved."""

    def __init__(
        self,
        message: str,
        secret_name: Optional[str] = None
    ):
        """
        Initialize credentials error.

        Args:
            message: Error message
            secret_name: Secrets Manager secret name if one was configured
        """
        super().__init__(message)
        self.message = message
        self.secret_name = secret_name
