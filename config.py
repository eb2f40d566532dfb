"""
Configuration module for environment variable validation and type-safe config.

Values are read once at process start and cached by get_config().
Credentials are never embedded here; they come from the environment or
from AWS Secrets Manager (see services.credentials_service).
"""
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_API_HOST = "vpc.api.qcloud.com"
DEFAULT_API_PATH = "/v2/index.php"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got: {raw}")


@dataclass
class Config:
    """Type-safe configuration object with validated environment variables."""

    secret_id: Optional[str] = None
    secret_key: Optional[str] = None
    secret_name: Optional[str] = None
    region: str = "sh"
    api_host: str = DEFAULT_API_HOST
    api_path: str = DEFAULT_API_PATH
    vpc_id: str = ""
    subnet_id: str = ""
    ip_count: int = 20
    request_timeout: float = 30.0
    append_vpc_id: bool = True
    aws_region: str = "us-east-1"
    log_level: str = "INFO"

    @property
    def host_and_path(self) -> str:
        """Host plus path, without scheme, as it appears in the signed string."""
        return f"{self.api_host}/{self.api_path.lstrip('/')}"

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create Config instance from environment variables.

        Raises:
            ValueError: If an environment variable holds an invalid value.
        """
        region = os.environ.get("CLOUD_REGION", "sh")
        if not region:
            raise ValueError("CLOUD_REGION must not be empty")

        api_host = os.environ.get("CLOUD_API_HOST") or DEFAULT_API_HOST
        api_path = os.environ.get("CLOUD_API_PATH") or DEFAULT_API_PATH

        raw_count = os.environ.get("CLOUD_IP_COUNT", "20")
        try:
            ip_count = int(raw_count)
        except ValueError:
            raise ValueError(
                f"CLOUD_IP_COUNT must be an integer, got: {raw_count}"
            )
        if ip_count <= 0:
            raise ValueError(
                f"CLOUD_IP_COUNT must be positive, got: {ip_count}"
            )

        raw_timeout = os.environ.get("CLOUD_REQUEST_TIMEOUT", "30")
        try:
            request_timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(
                f"CLOUD_REQUEST_TIMEOUT must be a number, got: {raw_timeout}"
            )
        if request_timeout <= 0:
            raise ValueError(
                f"CLOUD_REQUEST_TIMEOUT must be positive, got: {request_timeout}"
            )

        append_vpc_id = _parse_bool(
            "CLOUD_APPEND_VPC_ID", os.environ.get("CLOUD_APPEND_VPC_ID", "true")
        )

        aws_region = os.environ.get("AWS_REGION", "us-east-1")
        log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

        # Validate log level
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_log_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {valid_log_levels}, got: {log_level}"
            )

        return cls(
            secret_id=os.environ.get("CLOUD_SECRET_ID"),
            secret_key=os.environ.get("CLOUD_SECRET_KEY"),
            secret_name=os.environ.get("CLOUD_SECRET_NAME"),
            region=region,
            api_host=api_host,
            api_path=api_path,
            vpc_id=os.environ.get("CLOUD_VPC_ID", ""),
            subnet_id=os.environ.get("CLOUD_SUBNET_ID", ""),
            ip_count=ip_count,
            request_timeout=request_timeout,
            append_vpc_id=append_vpc_id,
            aws_region=aws_region,
            log_level=log_level,
        )


_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config: The validated configuration object

    Raises:
        ValueError: If environment variables are invalid.
    """
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config
