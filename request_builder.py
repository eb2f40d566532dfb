"""
Request parameter building and URL assembly for the QCloud VPC API.

Parameters are always sorted by key before they are encoded; the
signature is only valid over that exact ordering.
"""
import time
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Union
from urllib.parse import quote_plus, urlencode

from logger_config import get_logger
from signing import sign, signature_source

logger = get_logger(__name__)

ParamValue = Union[str, int]

APPLY_IPS_ACTION = "ApplyIps"


@dataclass
class SignedRequest:
    """A fully signed request, ready to be sent."""

    url: str
    canonical_query: str
    signature: str
    timestamp: int
    nonce: int
    region: str


def build_params(
    region: str,
    secret_id: str,
    vpc_id: str,
    subnet_id: str,
    count: int,
    action: str = APPLY_IPS_ACTION,
    now: Optional[int] = None
) -> Dict[str, ParamValue]:
    """
    Build the request parameter set.

    Nonce and Timestamp are both the current Unix time unless ``now`` is
    given.
    """
    if now is None:
        now = int(time.time())
    return {
        "Action": action,
        "Nonce": now,
        "Region": region,
        "SecretId": secret_id,
        "Timestamp": now,
        "vpcId": vpc_id,
        "subnetId": subnet_id,
        "count": count,
    }


def canonical_query(params: Mapping[str, ParamValue]) -> str:
    """Encode params as a query string with keys in ascending byte order."""
    return urlencode(sorted(params.items(), key=lambda item: item[0].encode("utf-8")))


def build_signed_request(
    params: Mapping[str, ParamValue],
    host_and_path: str,
    secret_key: str,
    append_vpc_id: bool = True,
    method: str = "GET"
) -> SignedRequest:
    """
    Canonicalize and sign params, then assemble the HTTPS URL.

    When ``append_vpc_id`` is set, ``vpcId`` is repeated once after the
    Signature field, as the VPC API has historically been called.
    """
    query = canonical_query(params)
    logger.debug(f"Signing {signature_source(method, host_and_path, query)}")
    signature = sign(method, host_and_path, query, secret_key)

    url = f"https://{host_and_path}?{query}&Signature={signature}"
    if append_vpc_id and params.get("vpcId"):
        url += f"&vpcId={quote_plus(str(params['vpcId']))}"

    return SignedRequest(
        url=url,
        canonical_query=query,
        signature=signature,
        timestamp=int(params["Timestamp"]),
        nonce=int(params["Nonce"]),
        region=str(params["Region"]),
    )
