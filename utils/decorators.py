"""
Command decorators for error handling, logging, and exit codes.
"""
import functools
import uuid
import traceback
from typing import Callable, Any
from logger_config import get_logger
from utils.exceptions import QCloudAPIError

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def cli_handler(func: Callable[..., Any]) -> Callable[..., int]:
    """
    Decorator for command entry points.

    Provides:
    - Request correlation IDs for logging
    - Mapping of exceptions to process exit codes
    - Error logging to stderr

    The wrapped function may return an int exit code; any other return
    value (including None) counts as success.

    Args:
        func: The command function to decorate

    Returns:
        Decorated function returning an exit code
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> int:
        correlation_id = str(uuid.uuid4())

        logger.debug(
            f"Command {func.__name__} invoked",
            extra={"correlation_id": correlation_id, "command": func.__name__}
        )

        try:
            result = func(*args, **kwargs)
        except QCloudAPIError as e:
            logger.error(
                f"Command {func.__name__} failed: {e.message}",
                extra={
                    "correlation_id": correlation_id,
                    "status_code": e.status_code,
                    "action": e.action,
                }
            )
            return EXIT_FAILURE
        except ValueError as e:
            # Configuration and credential errors
            logger.error(
                f"Command {func.__name__} configuration error: {str(e)}",
                extra={"correlation_id": correlation_id}
            )
            return EXIT_CONFIG_ERROR
        except Exception as e:
            logger.error(
                f"Command {func.__name__} failed unexpectedly: {str(e)}",
                extra={
                    "correlation_id": correlation_id,
                    "traceback": traceback.format_exc()
                },
                exc_info=True
            )
            return EXIT_FAILURE

        exit_code = result if isinstance(result, int) else EXIT_OK
        logger.debug(
            f"Command {func.__name__} finished with exit code {exit_code}",
            extra={"correlation_id": correlation_id}
        )
        return exit_code

    return wrapper
