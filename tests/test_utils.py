"""Tests for scalar coercion and the retrying transport."""

import pytest
import requests

from pugrest.errors import FloatParseError, IntegerParseError, RequestError
from pugrest.settings import MAX_RETRY
from pugrest.utils import INT32_MAX, INT32_MIN, parse_float, parse_int, safe_post

URL = "https://pubchem.ncbi.nlm.nih.gov/rest/pug/compound/cid/cids/XML"


class TestParseInt:
    def test_signed_values(self):
        assert parse_int("2244", "CID") == 2244
        assert parse_int("-3", "Charge") == -3
        assert parse_int(" 7\n", "Size") == 7

    def test_range_limits(self):
        assert parse_int(str(INT32_MAX), "CID") == INT32_MAX
        assert parse_int(str(INT32_MIN), "CID") == INT32_MIN
        with pytest.raises(IntegerParseError, match="out of 32-bit range"):
            parse_int(str(INT32_MAX + 1), "CID")

    @pytest.mark.parametrize("text", ["", "abc", "1.5", "0x10"])
    def test_rejects_non_integers(self, text):
        with pytest.raises(IntegerParseError) as exc_info:
            parse_int(text, "Charge")
        assert exc_info.value.field == "Charge"
        assert exc_info.value.text == text


class TestParseFloat:
    def test_values(self):
        assert parse_float("1.2", "XLogP") == pytest.approx(1.2)
        assert parse_float("-0.5e1", "XLogP") == pytest.approx(-5.0)
        assert parse_float("136", "Volume3D") == pytest.approx(136.0)

    def test_rejects_text(self):
        with pytest.raises(FloatParseError) as exc_info:
            parse_float("n/a", "TPSA")
        assert exc_info.value.kind == "float"
        assert "TPSA" in str(exc_info.value)


class TestSafePost:
    def test_returns_error_statuses_unchanged(self, server):
        server.add(404, b"")
        response = safe_post(URL, data={"cid": "1"})
        assert response.status_code == 404
        assert len(server.calls) == 1

    def test_sends_user_agent_and_extra_headers(self, server):
        server.add(200, b"")
        safe_post(URL, data={"cid": "1"}, headers={"Accept": "application/xml"})
        headers = server.calls[0]["headers"]
        assert "User-Agent" in headers
        assert headers["Accept"] == "application/xml"
        assert server.calls[0]["data"] == {"cid": "1"}

    def test_retries_connection_errors(self, server):
        server.add_error(requests.exceptions.ConnectionError("refused"))
        server.add(200, b"ok")
        assert safe_post(URL, data={}).status_code == 200
        assert len(server.calls) == 2

    def test_gives_up_after_max_retry(self, server):
        for _ in range(MAX_RETRY):
            server.add_error(requests.exceptions.Timeout("slow"))
        with pytest.raises(RequestError):
            safe_post(URL, data={})
        assert len(server.calls) == MAX_RETRY

    def test_retries_rate_limit(self, server):
        limited = server.add(429, b"", reason="Too Many Requests")
        server.add(200, b"")
        assert safe_post(URL, data={}).status_code == 200
        assert limited.closed

    def test_rate_limit_on_last_attempt_is_returned(self, server):
        for _ in range(MAX_RETRY):
            server.add(429, b"", reason="Too Many Requests")
        assert safe_post(URL, data={}).status_code == 429

    def test_other_request_errors_are_not_retried(self, server):
        server.add_error(requests.exceptions.InvalidURL("bad url"))
        with pytest.raises(RequestError):
            safe_post(URL, data={})
        assert len(server.calls) == 1
