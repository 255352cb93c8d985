"""
Error types raised by the PUG REST client
"""
from typing import Dict, Optional, Type

from .models import Fault


class PugRestError(Exception):
    """Base class for every error raised by this package."""


# ---------------------------------------------------------------------------
# Service faults

class ApiError(PugRestError):
    """PUG REST が <Fault> 文書で返したエラー"""

    label = "api error"

    def __init__(self, message: str, fault: Optional[Fault] = None):
        self.message = message
        self.fault = fault
        super().__init__(message)

    @property
    def code(self) -> Optional[str]:
        return self.fault.code if self.fault is not None else None

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class BadRequestError(ApiError):
    """Request is improperly formed."""
    label = "bad request"


class NotFoundError(ApiError):
    """The input record was not found."""
    label = "not found"


class NotAllowedError(ApiError):
    """Request not allowed."""
    label = "not allowed"


class ServerTimeoutError(ApiError):
    """The request timed out, from server overload or too broad a request."""
    label = "timeout"


class ServerBusyError(ApiError):
    """Too many requests or server is busy, retry later."""
    label = "server busy"


class UnimplementedError(ApiError):
    """The requested operation has not (yet) been implemented by the server."""
    label = "unimplemented"


class ServerError(ApiError):
    """Some problem on the server side (such as a database server down)."""
    label = "server error"


class UnknownApiError(ApiError):
    """The fault code is not one the service documents."""
    label = "unknown error"


FAULT_CODES: Dict[str, Type[ApiError]] = {
    "PUGREST.BadRequest": BadRequestError,
    "PUGREST.NotFound": NotFoundError,
    "PUGREST.NotAllowed": NotAllowedError,
    "PUGREST.Timeout": ServerTimeoutError,
    "PUGREST.ServerBusy": ServerBusyError,
    "PUGREST.Unimplemented": UnimplementedError,
    "PUGREST.ServerError": ServerError,
}


def classify_fault(fault: Fault) -> ApiError:
    """
    Fault のコード文字列を対応する ApiError に変換

    未知のコードは UnknownApiError になり、メッセージはそのまま保持される。
    """
    error_cls = FAULT_CODES.get(fault.code, UnknownApiError)
    return error_cls(fault.message, fault)


# ---------------------------------------------------------------------------
# Transport

class RequestError(PugRestError):
    """HTTP transport failure not covered by a <Fault> body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


# ---------------------------------------------------------------------------
# Document structure

class XmlError(PugRestError):
    """The response body could not be read as the expected XML document."""


class XmlSyntaxError(XmlError):
    """The document is not well-formed."""


class XmlIOError(XmlError):
    """Reading the response body failed before the document was complete."""


class UnexpectedEofError(XmlError):
    """The stream ended before the element was closed."""

    def __init__(self, element: str):
        self.element = element
        super().__init__(f"unexpected end of stream while reading <{element}>")


class UnexpectedElementError(XmlError):
    """A decoder was handed an element it does not decode."""

    def __init__(self, expected: str, found: str):
        self.expected = expected
        self.found = found
        super().__init__(f"expected <{expected}>, found <{found}>")


# ---------------------------------------------------------------------------
# Scalar values

class ParseError(PugRestError):
    """Element text does not match the numeric grammar of its field."""

    kind = ""

    def __init__(self, field: str, text: str, reason: str = ""):
        self.field = field
        self.text = text
        message = f"invalid {self.kind} in <{field}>: {text!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class IntegerParseError(ParseError):
    kind = "int"


class FloatParseError(ParseError):
    kind = "float"


# ---------------------------------------------------------------------------

class UnsupportedElementError(PugRestError, NotImplementedError):
    """The document holds an element whose decoding is not supported yet."""

    def __init__(self, element: str):
        self.element = element
        super().__init__(f"decoding <{element}> is not supported")


class MissingRecordError(PugRestError):
    """A single-record operation returned no record."""
