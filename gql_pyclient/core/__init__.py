"""Core modules for the GraphQL client."""

from .auth import (
    AUTH_FLOW,
    CognitoCredentialProvider,
    Credential,
    CredentialProvider,
    StaticCredentialProvider,
)
from .builder import GraphQLRequest, RequestBuilder
from .client import (
    USE_CLIENT_DEFAULT,
    ClientOptions,
    CognitoAuthorizationOptions,
    GraphQLClient,
)
from .errors import (
    AuthError,
    DataDecodeError,
    DecodeError,
    EncodeError,
    EnvelopeDecodeError,
    ErrorResponse,
    GraphQLClientError,
    NetworkError,
    ProtocolError,
    ProtocolErrorList,
    ReadError,
    TransportConstructionError,
    TransportError,
)
from .introspection import (
    INTROSPECTION_QUERY,
    build_schema_from_introspection,
    is_introspection_query,
)
from .options import (
    FunctionOption,
    OptionRunner,
    RequestOption,
    WithBearerToken,
    WithHeader,
    WithHeaders,
)
from .reconcile import ResponseEnvelope, parse_response
from .scalars import (
    DateHandler,
    DateTimeHandler,
    DecimalHandler,
    EnumHandler,
    ScalarHandler,
    ScalarRegistry,
    UUIDHandler,
    encode_variables,
)
from .transport import RawResponse, TransportExecutor

__all__ = [
    # Auth
    "AUTH_FLOW",
    "Credential",
    "CredentialProvider",
    "CognitoCredentialProvider",
    "StaticCredentialProvider",
    # Request options
    "RequestOption",
    "WithHeader",
    "WithHeaders",
    "WithBearerToken",
    "FunctionOption",
    "OptionRunner",
    # Scalars
    "ScalarHandler",
    "ScalarRegistry",
    "DateTimeHandler",
    "DateHandler",
    "UUIDHandler",
    "DecimalHandler",
    "EnumHandler",
    "encode_variables",
    # Errors
    "GraphQLClientError",
    "EncodeError",
    "TransportConstructionError",
    "AuthError",
    "TransportError",
    "ReadError",
    "DecodeError",
    "EnvelopeDecodeError",
    "DataDecodeError",
    "ProtocolError",
    "ProtocolErrorList",
    "NetworkError",
    "ErrorResponse",
    # Introspection
    "INTROSPECTION_QUERY",
    "is_introspection_query",
    "build_schema_from_introspection",
    # Request / response
    "GraphQLRequest",
    "RequestBuilder",
    "RawResponse",
    "TransportExecutor",
    "ResponseEnvelope",
    "parse_response",
    # Client
    "USE_CLIENT_DEFAULT",
    "ClientOptions",
    "CognitoAuthorizationOptions",
    "GraphQLClient",
]
