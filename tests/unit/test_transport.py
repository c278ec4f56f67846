"""Tests for the HTTP transport and auth."""

from __future__ import annotations

import base64
import json

import httpx
import pytest
import respx

from easyredir_cli.client.auth import EasyredirAuth
from easyredir_cli.client.errors import (
    APIError,
    ConfigurationError,
    DecodeError,
    EasyredirConnectionError,
    HTTPStatusError,
    RateLimitError,
    RequestError,
)
from easyredir_cli.client.transport import EasyredirClient, Request, decode
from easyredir_cli.config.models import CredentialProfile, Credentials
from easyredir_cli.models.common import Item
from easyredir_cli.models.rule import Rule

API = "https://api.easyredir.com/v1"
MEDIA_TYPE = "application/json; charset=utf-8"


class TestAuth:
    def test_basic_auth_header(self):
        auth = EasyredirAuth(Credentials(key="key", secret="secret"))
        request = httpx.Request("GET", f"{API}/rules")
        modified = next(auth.auth_flow(request))
        expected = base64.b64encode(b"key:secret").decode()
        assert modified.headers["Authorization"] == f"Basic {expected}"

    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH"])
    def test_idempotency_key_on_mutating_methods(self, method):
        auth = EasyredirAuth(Credentials(key="k", secret="s"))
        modified = next(auth.auth_flow(httpx.Request(method, f"{API}/rules")))
        assert modified.headers["Idempotency-Key"]

    @pytest.mark.parametrize("method", ["GET", "DELETE"])
    def test_no_idempotency_key_on_reads(self, method):
        auth = EasyredirAuth(Credentials(key="k", secret="s"))
        modified = next(auth.auth_flow(httpx.Request(method, f"{API}/rules")))
        assert "Idempotency-Key" not in modified.headers

    def test_existing_key_kept(self):
        auth = EasyredirAuth(Credentials(key="k", secret="s"))
        request = httpx.Request("POST", f"{API}/rules", headers={"Idempotency-Key": "fixed"})
        modified = next(auth.auth_flow(request))
        assert modified.headers["Idempotency-Key"] == "fixed"


class TestEasyredirClient:
    def test_requires_credentials(self):
        with pytest.raises(ConfigurationError, match="no API key"):
            EasyredirClient(CredentialProfile(name="empty"))

    @respx.mock
    def test_success_returns_response(self, sample_profile):
        respx.get(f"{API}/rules").mock(
            return_value=httpx.Response(200, json={"data": []})
        )
        with EasyredirClient(sample_profile) as client:
            resp = client.get("/rules")
        assert resp.json() == {"data": []}

    @respx.mock
    def test_headers(self, sample_profile):
        route = respx.get(f"{API}/rules").mock(
            return_value=httpx.Response(200, json={"data": []})
        )
        with EasyredirClient(sample_profile) as client:
            client.get("/rules")
        sent = route.calls.last.request
        assert sent.headers["Content-Type"] == MEDIA_TYPE
        assert sent.headers["Accept"] == MEDIA_TYPE
        assert sent.headers["Authorization"].startswith("Basic ")
        assert "Idempotency-Key" not in sent.headers

    @respx.mock
    def test_fresh_idempotency_key_per_request(self, sample_profile):
        route = respx.post(f"{API}/rules").mock(
            return_value=httpx.Response(201, json={"data": {"id": "r1"}})
        )
        with EasyredirClient(sample_profile) as client:
            client.post("/rules", {"data": {}})
            client.post("/rules", {"data": {}})
        first, second = (c.request.headers["Idempotency-Key"] for c in route.calls)
        assert first and second
        assert first != second

    @respx.mock
    def test_pinned_idempotency_key(self, sample_profile):
        route = respx.patch(f"{API}/rules/r1").mock(
            return_value=httpx.Response(200, json={"data": {"id": "r1"}})
        )
        request = Request(method="PATCH", path="/rules/r1", body={}, idempotency_key="retry-1")
        with EasyredirClient(sample_profile) as client:
            client.send(request)
            client.send(request)
        assert [c.request.headers["Idempotency-Key"] for c in route.calls] == ["retry-1", "retry-1"]

    @pytest.mark.parametrize("method", ["GET", "DELETE"])
    @respx.mock
    def test_pinned_key_not_sent_on_reads(self, sample_profile, method):
        route = respx.route(method=method, url=f"{API}/rules").mock(
            return_value=httpx.Response(200, json={"data": []})
        )
        with EasyredirClient(sample_profile) as client:
            client.send(Request(method=method, path="/rules", idempotency_key="pinned"))
        assert "Idempotency-Key" not in route.calls.last.request.headers

    @respx.mock
    def test_json_body_sent(self, sample_profile):
        route = respx.post(f"{API}/rules").mock(
            return_value=httpx.Response(201, json={"data": {"id": "r1"}})
        )
        with EasyredirClient(sample_profile) as client:
            client.post("/rules", {"data": {"type": "rule"}})
        assert json.loads(route.calls.last.request.content) == {"data": {"type": "rule"}}

    @respx.mock
    def test_rate_limited(self, sample_profile):
        respx.get(f"{API}/rules").mock(
            return_value=httpx.Response(
                429,
                headers={
                    "X-Ratelimit-Limit": "100",
                    "X-Ratelimit-Remaining": "0",
                    "X-Ratelimit-Reset": "1640995200",
                },
            )
        )
        with EasyredirClient(sample_profile) as client, pytest.raises(RateLimitError) as exc_info:
            client.get("/rules")
        assert exc_info.value.limit == "100"
        assert exc_info.value.remaining == "0"
        assert exc_info.value.reset == "1640995200"

    @respx.mock
    def test_rate_limit_wins_over_error_body(self, sample_profile):
        respx.get(f"{API}/rules").mock(
            return_value=httpx.Response(
                429,
                headers={"X-Ratelimit-Limit": "100"},
                json={"type": "rate_limit_error", "message": "slow down", "errors": []},
            )
        )
        with EasyredirClient(sample_profile) as client, pytest.raises(RateLimitError):
            client.get("/rules")

    @respx.mock
    def test_rate_limit_missing_headers(self, sample_profile):
        respx.get(f"{API}/rules").mock(return_value=httpx.Response(429))
        with EasyredirClient(sample_profile) as client, pytest.raises(RateLimitError) as exc_info:
            client.get("/rules")
        assert exc_info.value.limit == ""

    @respx.mock
    def test_api_error(self, sample_profile):
        respx.post(f"{API}/rules").mock(
            return_value=httpx.Response(
                422,
                json={
                    "type": "invalid_request_error",
                    "message": "Invalid rule",
                    "errors": [
                        {
                            "resource": "rule",
                            "param": "target_url",
                            "code": "missing",
                            "message": "can't be blank",
                        },
                    ],
                },
            )
        )
        with EasyredirClient(sample_profile) as client, pytest.raises(APIError) as exc_info:
            client.post("/rules", {"data": {}})
        exc = exc_info.value
        assert str(exc) == "invalid_request_error: Invalid rule"
        assert exc.status_code == 422
        assert exc.errors[0].param == "target_url"
        assert exc.errors[0].code == "missing"

    @respx.mock
    def test_api_error_with_null_errors(self, sample_profile):
        respx.get(f"{API}/hosts/h1").mock(
            return_value=httpx.Response(
                404, json={"type": "not_found_error", "message": "No such host", "errors": None},
            )
        )
        with EasyredirClient(sample_profile) as client, pytest.raises(APIError) as exc_info:
            client.get("/hosts/h1")
        assert str(exc_info.value) == "not_found_error: No such host"
        assert exc_info.value.errors == []

    @respx.mock
    def test_malformed_error_body(self, sample_profile):
        respx.get(f"{API}/rules").mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )
        with EasyredirClient(sample_profile) as client, pytest.raises(HTTPStatusError) as exc_info:
            client.get("/rules")
        assert exc_info.value.status_code == 500
        assert not isinstance(exc_info.value, APIError)

    @respx.mock
    def test_error_body_wrong_shape(self, sample_profile):
        respx.get(f"{API}/rules").mock(
            return_value=httpx.Response(404, json={"detail": "nope"})
        )
        with EasyredirClient(sample_profile) as client, pytest.raises(HTTPStatusError):
            client.get("/rules")

    @respx.mock
    def test_redirect_status_is_success(self, sample_profile):
        respx.get(f"{API}/rules").mock(return_value=httpx.Response(304))
        with EasyredirClient(sample_profile) as client:
            assert client.get("/rules").status_code == 304

    @respx.mock
    def test_connect_error(self, sample_profile):
        respx.get(f"{API}/rules").mock(side_effect=httpx.ConnectError("refused"))
        with EasyredirClient(sample_profile) as client, pytest.raises(
            EasyredirConnectionError, match="Cannot connect",
        ):
            client.get("/rules")

    @respx.mock
    def test_timeout(self, sample_profile):
        respx.get(f"{API}/rules").mock(side_effect=httpx.ReadTimeout("slow"))
        with EasyredirClient(sample_profile) as client, pytest.raises(
            EasyredirConnectionError, match="timed out",
        ):
            client.get("/rules")

    def test_unsupported_method(self, sample_profile):
        with EasyredirClient(sample_profile) as client, pytest.raises(RequestError):
            client.send(Request(method="BREW", path="/rules"))

    @respx.mock
    def test_one_call_no_retry(self, sample_profile):
        route = respx.get(f"{API}/rules").mock(return_value=httpx.Response(503))
        with EasyredirClient(sample_profile) as client, pytest.raises(HTTPStatusError):
            client.get("/rules")
        assert route.call_count == 1

    @respx.mock
    def test_custom_base_url(self):
        profile = CredentialProfile(
            name="staging", api_key="k", api_secret="s", base_url="https://staging.test/v1/",
        )
        route = respx.get("https://staging.test/v1/hosts").mock(
            return_value=httpx.Response(200, json={"data": []})
        )
        with EasyredirClient(profile) as client:
            client.get("/hosts")
        assert route.call_count == 1


class TestDecode:
    def test_decode_item(self):
        resp = httpx.Response(
            200,
            json={"data": {"id": "r1", "type": "rule"}},
            request=httpx.Request("GET", f"{API}/rules/r1"),
        )
        assert decode(resp, Item[Rule]).data.id == "r1"

    def test_decode_invalid_json(self):
        resp = httpx.Response(200, text="notjson", request=httpx.Request("GET", f"{API}/rules"))
        with pytest.raises(DecodeError, match="GET /v1/rules"):
            decode(resp, Item[Rule])
