"""
Unit tests for request signing and canonical query building.
"""
import pytest
from request_builder import build_params, build_signed_request, canonical_query
from signing import sign, signature_source

HOST_AND_PATH = "vpc.api.qcloud.com/v2/index.php"
SECRET_ID = "AKIDtestsecretid"
SECRET_KEY = "test-secret-key"

# Reference values computed independently with
# `openssl dgst -sha1 -hmac test-secret-key -binary | base64`
EXPECTED_QUERY = (
    "Action=ApplyIps&Nonce=1700000000&Region=sh&SecretId=AKIDtestsecretid"
    "&Timestamp=1700000000&count=20&subnetId=42&vpcId=vpc-o5sjk6f1"
)
EXPECTED_SIGNATURE = "DanHA%2F8C9Tf3sCbSrrmwaY9si%2B0%3D"


@pytest.fixture
def params():
    return build_params(
        region="sh",
        secret_id=SECRET_ID,
        vpc_id="vpc-o5sjk6f1",
        subnet_id="42",
        count=20,
        now=1700000000,
    )


class TestCanonicalQuery:
    """Tests for canonical_query."""

    def test_reference_scenario(self, params):
        assert canonical_query(params) == EXPECTED_QUERY

    def test_keys_strictly_ascending(self, params):
        keys = [pair.split("=", 1)[0] for pair in canonical_query(params).split("&")]
        assert keys == sorted(keys)
        assert len(keys) == len(set(keys))

    def test_uppercase_sorts_before_lowercase(self):
        query = canonical_query({"b": 1, "a": 2, "B": 3, "A": 4})
        assert query == "A=4&B=3&a=2&b=1"

    def test_insertion_order_does_not_matter(self, params):
        reversed_params = dict(reversed(list(params.items())))
        assert canonical_query(reversed_params) == canonical_query(params)

    def test_values_are_url_encoded(self):
        query = canonical_query({"name": "a b&c=d", "path": "/x"})
        assert query == "name=a+b%26c%3Dd&path=%2Fx"


class TestBuildParams:
    """Tests for build_params."""

    def test_nonce_and_timestamp_from_now(self, params):
        assert params["Nonce"] == 1700000000
        assert params["Timestamp"] == 1700000000
        assert params["Action"] == "ApplyIps"

    def test_defaults_to_current_time(self, monkeypatch):
        monkeypatch.setattr("request_builder.time.time", lambda: 1234.9)
        result = build_params("sh", SECRET_ID, "vpc-1", "1", 1)
        assert result["Nonce"] == 1234
        assert result["Timestamp"] == 1234

    def test_contains_all_fields(self, params):
        assert set(params) == {
            "Action", "Nonce", "Region", "SecretId",
            "Timestamp", "vpcId", "subnetId", "count",
        }


class TestSign:
    """Tests for sign."""

    def test_signature_source(self):
        assert signature_source("get", HOST_AND_PATH, "a=1") == (
            "GETvpc.api.qcloud.com/v2/index.php?a=1"
        )

    def test_reference_signature(self):
        assert sign("GET", HOST_AND_PATH, EXPECTED_QUERY, SECRET_KEY) == EXPECTED_SIGNATURE

    def test_deterministic(self):
        first = sign("GET", HOST_AND_PATH, EXPECTED_QUERY, SECRET_KEY)
        second = sign("GET", HOST_AND_PATH, EXPECTED_QUERY, SECRET_KEY)
        assert first == second

    def test_different_key_changes_signature(self):
        assert sign("GET", HOST_AND_PATH, EXPECTED_QUERY, "other-key") != EXPECTED_SIGNATURE

    def test_signature_is_url_safe(self):
        signature = sign("GET", HOST_AND_PATH, EXPECTED_QUERY, SECRET_KEY)
        for char in "+/=":
            assert char not in signature

    @pytest.mark.parametrize("secret_key", ["", None])
    def test_missing_key_raises(self, secret_key):
        with pytest.raises(ValueError, match="secret key"):
            sign("GET", HOST_AND_PATH, EXPECTED_QUERY, secret_key)


class TestBuildSignedRequest:
    """Tests for build_signed_request."""

    def test_reference_url(self, params):
        request = build_signed_request(params, HOST_AND_PATH, SECRET_KEY)
        assert request.url == (
            f"https://{HOST_AND_PATH}?{EXPECTED_QUERY}"
            f"&Signature={EXPECTED_SIGNATURE}&vpcId=vpc-o5sjk6f1"
        )
        assert request.canonical_query == EXPECTED_QUERY
        assert request.signature == EXPECTED_SIGNATURE
        assert request.timestamp == 1700000000
        assert request.nonce == 1700000000
        assert request.region == "sh"

    def test_single_signature_and_trailing_vpc_id(self, params):
        url = build_signed_request(params, HOST_AND_PATH, SECRET_KEY).url
        assert url.count("Signature=") == 1
        after_signature = url.split("&Signature=", 1)[1]
        assert after_signature.count("&vpcId=") == 1
        assert after_signature.endswith("&vpcId=vpc-o5sjk6f1")

    def test_without_trailing_vpc_id(self, params):
        url = build_signed_request(
            params, HOST_AND_PATH, SECRET_KEY, append_vpc_id=False
        ).url
        assert url.endswith(f"&Signature={EXPECTED_SIGNATURE}")
        assert url.count("vpcId=") == 1

    def test_repeated_runs_are_identical(self, params):
        first = build_signed_request(params, HOST_AND_PATH, SECRET_KEY)
        second = build_signed_request(dict(params), HOST_AND_PATH, SECRET_KEY)
        assert first == second
