"""
pugrest - PubChem PUG REST client with a streaming XML decoder
"""
from .client import Compound
from .errors import (
    PugRestError, ApiError, BadRequestError, NotFoundError, NotAllowedError,
    ServerTimeoutError, ServerBusyError, UnimplementedError, ServerError,
    UnknownApiError, RequestError, XmlError, XmlSyntaxError, XmlIOError,
    UnexpectedEofError, UnexpectedElementError, ParseError, IntegerParseError,
    FloatParseError, UnsupportedElementError, MissingRecordError, classify_fault,
)
from .models import (
    Fault, Waiting, Properties, PropertyTable, IdentifierList, DateTime,
    Annotation, Information, InformationList,
)
from .parser import from_api_response
from .properties import CompoundProperty

__version__ = "0.1.0"
