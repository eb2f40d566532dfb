"""
Apply for IP addresses in a QCloud VPC subnet.

Builds and signs a single ApplyIps request, sends it, and echoes the
timestamp, nonce, request URL and raw response body to stdout.
"""
import argparse
import dataclasses
import sys
from typing import List, Optional

from config import Config, get_config
from logger_config import get_logger
from request_builder import APPLY_IPS_ACTION, build_params, build_signed_request
from services.credentials_service import get_qcloud_credentials
from services.qcloud_vpc_service import QCloudVpcService
from utils.decorators import EXIT_FAILURE, EXIT_OK, cli_handler

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Apply for IP addresses in a QCloud VPC subnet"
    )
    parser.add_argument("--region", help="API region, e.g. sh (CLOUD_REGION)")
    parser.add_argument("--vpc-id", help="VPC identifier (CLOUD_VPC_ID)")
    parser.add_argument("--subnet-id", help="Subnet identifier (CLOUD_SUBNET_ID)")
    parser.add_argument("--count", type=int, help="Number of IPs to apply for (CLOUD_IP_COUNT)")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds (CLOUD_REQUEST_TIMEOUT)")
    parser.add_argument(
        "--no-append-vpc-id",
        action="store_true",
        help="Do not repeat vpcId after the Signature field"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the signed URL without sending it"
    )
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace, config: Config) -> Config:
    """Apply command line overrides on top of the environment config."""
    overrides = {}
    if args.region:
        overrides["region"] = args.region
    if args.vpc_id:
        overrides["vpc_id"] = args.vpc_id
    if args.subnet_id:
        overrides["subnet_id"] = args.subnet_id
    if args.count is not None:
        overrides["ip_count"] = args.count
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    if args.no_append_vpc_id:
        overrides["append_vpc_id"] = False
    config = dataclasses.replace(config, **overrides)

    if not config.vpc_id:
        raise ValueError("a VPC id is required (--vpc-id or CLOUD_VPC_ID)")
    if not config.subnet_id:
        raise ValueError("a subnet id is required (--subnet-id or CLOUD_SUBNET_ID)")
    if config.ip_count <= 0:
        raise ValueError(f"count must be positive, got: {config.ip_count}")
    if config.request_timeout <= 0:
        raise ValueError(f"timeout must be positive, got: {config.request_timeout}")
    return config


@cli_handler
def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = resolve_config(args, get_config())
    secret_id, secret_key = get_qcloud_credentials(config)

    params = build_params(
        region=config.region,
        secret_id=secret_id,
        vpc_id=config.vpc_id,
        subnet_id=config.subnet_id,
        count=config.ip_count,
    )
    request = build_signed_request(
        params,
        config.host_and_path,
        secret_key,
        append_vpc_id=config.append_vpc_id,
    )

    print(f"time={request.timestamp}")
    print(f"Nonce={request.nonce}")
    print(f"{request.region} {request.url}")

    if args.dry_run:
        logger.info("Dry run, request not sent")
        return EXIT_OK

    service = QCloudVpcService(timeout=config.request_timeout)
    response = service.invoke(request.url, action=APPLY_IPS_ACTION)

    print(response.body)
    print()

    if not response.ok:
        logger.error(f"{APPLY_IPS_ACTION} returned HTTP {response.status_code}")
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
