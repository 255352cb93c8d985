"""Shared test utilities for pugrest tests."""

from __future__ import annotations

NS = 'xmlns="http://pubchem.ncbi.nlm.nih.gov/pug_rest"'


def xml_doc(body: str) -> bytes:
    """Wrap a document body in the XML declaration the service sends."""
    return ('<?xml version="1.0" encoding="UTF-8"?>\n' + body).encode("utf-8")


def fault_doc(code: str, message: str, *details: str) -> bytes:
    details_xml = "".join(f"<Details>{d}</Details>" for d in details)
    return xml_doc(
        f"<Fault {NS}><Code>{code}</Code><Message>{message}</Message>{details_xml}</Fault>"
    )


class FakeResponse:
    """Minimal stand-in for a streamed requests.Response."""

    def __init__(self, status_code: int = 200, body: bytes = b"", reason: str = "OK"):
        self.status_code = status_code
        self.body = body
        self.reason = reason
        self.closed = False

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self.body), chunk_size):
            yield self.body[i:i + chunk_size]

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeServer:
    """Queue of canned responses served in place of requests.post."""

    def __init__(self) -> None:
        self.responses: list = []
        self.calls: list[dict] = []

    def add(self, status_code: int = 200, body: bytes = b"", reason: str = "OK") -> FakeResponse:
        response = FakeResponse(status_code, body, reason)
        self.responses.append(response)
        return response

    def add_error(self, error: Exception) -> None:
        self.responses.append(error)

    def post(self, url, data=None, headers=None, timeout=None, stream=False):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        if not self.responses:
            raise AssertionError(f"unexpected request to {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
