"""
QCloud VPC API service for signed GET requests.
"""
import requests
from dataclasses import dataclass
from typing import Dict, Optional
from logger_config import get_logger
from utils.exceptions import QCloudAPIError

logger = get_logger(__name__)


@dataclass
class ApiResponse:
    """Raw outcome of a single API call."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class QCloudVpcService:
    """Service for QCloud VPC API operations."""

    DEFAULT_HEADERS = {
        'Accept': 'application/json, text/plain, */*',
        'User-Agent': 'qcloud-ip-allocator',
    }
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Initialize QCloud VPC service.

        Args:
            timeout: Request timeout in seconds
            headers: Optional custom headers (defaults to DEFAULT_HEADERS)
        """
        self.timeout: float = timeout
        self.headers: Dict[str, str] = headers or self.DEFAULT_HEADERS

    def invoke(self, url: str, action: Optional[str] = None) -> ApiResponse:
        """
        Issue one GET request against an already signed URL.

        The response body is returned as raw text whatever the status
        code; non-2xx statuses are logged but not raised.

        Args:
            url: Fully assembled, signed request URL
            action: API action name, used for logging and errors

        Returns:
            ApiResponse with status code and raw body

        Raises:
            QCloudAPIError: If the request fails at the transport level
        """
        try:
            with requests.Session() as session:
                response = session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f'QCloud {action or "API"} request failed: {str(e)}')
            raise QCloudAPIError(
                f"QCloud {action or 'API'} request failed: {str(e)}",
                action=action
            ) from e

        result = ApiResponse(status_code=response.status_code, body=response.text)
        if result.ok:
            logger.info(f'QCloud {action or "API"} request returned {result.status_code}')
        else:
            logger.warning(
                f'QCloud {action or "API"} request returned HTTP {result.status_code}'
            )
        return result

    def apply_ips(self, url: str) -> ApiResponse:
        """Send a signed ApplyIps request."""
        return self.invoke(url, action="ApplyIps")
