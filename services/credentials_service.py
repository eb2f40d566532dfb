"""
QCloud credential lookup from AWS Secrets Manager with environment fallback.
"""
import json
import os
import boto3
from typing import Tuple
from config import Config, get_config
from logger_config import get_logger
from utils.exceptions import CredentialsError

logger = get_logger(__name__)


def _from_secrets_manager(config: Config) -> Tuple[str, str]:
    secrets_client = boto3.client(
        'secretsmanager', region_name=config.aws_region
    )
    response = secrets_client.get_secret_value(SecretId=config.secret_name)
    secret_data = json.loads(response['SecretString'])
    return secret_data.get('secret_id'), secret_data.get('secret_key')


def get_qcloud_credentials(config: Config = None) -> Tuple[str, str]:
    """
    Retrieve the QCloud SecretId and SecretKey.

    Secrets Manager is tried first when CLOUD_SECRET_NAME is configured;
    the secret must be a JSON object with ``secret_id`` and
    ``secret_key``. Otherwise, or on any failure, CLOUD_SECRET_ID and
    CLOUD_SECRET_KEY are used.

    Returns:
        Tuple of (secret_id, secret_key).

    Raises:
        CredentialsError: If neither source provides both values.
    """
    config = config or get_config()

    if config.secret_name:
        try:
            secret_id, secret_key = _from_secrets_manager(config)
            if secret_id and secret_key:
                logger.info(
                    f'Retrieved QCloud credentials from '
                    f'Secrets Manager: {config.secret_name}'
                )
                return secret_id, secret_key
            logger.warning(
                f'Secrets Manager secret {config.secret_name} is missing '
                f'secret_id/secret_key, falling back to env vars'
            )
        except Exception as e:
            logger.warning(
                f'Failed to retrieve credentials from Secrets Manager '
                f'({config.secret_name}): {str(e)}. '
                f'Falling back to environment variables.'
            )

    secret_id = config.secret_id or os.environ.get('CLOUD_SECRET_ID')
    secret_key = config.secret_key or os.environ.get('CLOUD_SECRET_KEY')

    if secret_id and secret_key:
        logger.debug('Using QCloud credentials from environment variables')
        return secret_id, secret_key

    secret_name = config.secret_name or "not configured"
    error_msg = (
        'QCloud credentials not found in Secrets Manager or environment '
        f'variables (CLOUD_SECRET_ID/CLOUD_SECRET_KEY). Secret name: {secret_name}'
    )
    raise CredentialsError(error_msg, secret_name=config.secret_name)
