"""Remote move oracles: wire parsers, Qt HTTP transport and clients."""

from xqcloud.oracle.client import (
    CLOUD_LIBRARY_URL,
    ENGINE_API_URL,
    CloudLibraryOracle,
    EngineApiOracle,
    IOracleClient,
)
from xqcloud.oracle.models import (
    FailureKind,
    OracleCandidate,
    OracleFailure,
    OracleResponse,
    OracleResult,
    OracleSource,
)
from xqcloud.oracle.parsing import (
    parse_cloud_library_text,
    parse_engine_api_payload,
    parse_engine_api_text,
)
from xqcloud.oracle.transport import HttpMethod, HttpReply, IHttpTransport, QtHttpTransport

__all__ = [
    "CLOUD_LIBRARY_URL",
    "ENGINE_API_URL",
    "CloudLibraryOracle",
    "EngineApiOracle",
    "FailureKind",
    "HttpMethod",
    "HttpReply",
    "IHttpTransport",
    "IOracleClient",
    "OracleCandidate",
    "OracleFailure",
    "OracleResponse",
    "OracleResult",
    "OracleSource",
    "QtHttpTransport",
    "parse_cloud_library_text",
    "parse_engine_api_payload",
    "parse_engine_api_text",
]
