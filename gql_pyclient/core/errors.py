"""Error model for GraphQL clients.

Every failure raised by the client derives from GraphQLClientError, so callers
can tell the variants apart with ``except`` clauses instead of inspecting
error payloads:

    try:
        user = await client.post("GetUser", query, User, {"id": 1})
    except ErrorResponse as e:
        if e.network_error:
            ...  # non-2xx status
        for err in e.graphql_errors or []:
            ...  # GraphQL-level errors, in server order
    except EnvelopeDecodeError:
        ...  # body was not a GraphQL response at all
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter


class GraphQLClientError(Exception):
    """Base class for all client errors."""


class EncodeError(GraphQLClientError):
    """The request envelope could not be serialized."""


class TransportConstructionError(GraphQLClientError):
    """The outbound request could not be constructed (bad endpoint)."""


class AuthError(GraphQLClientError):
    """The identity provider round-trip failed."""


class TransportError(GraphQLClientError):
    """The request could not be sent, or its deadline expired."""


class ReadError(GraphQLClientError):
    """The response body could not be fully read."""


class DecodeError(GraphQLClientError):
    """A response could not be decoded."""


class EnvelopeDecodeError(DecodeError):
    """The response body is not a JSON object."""


class DataDecodeError(DecodeError):
    """The ``data`` or ``errors`` member does not fit the expected shape."""


class Location(BaseModel):
    """A position in the query document."""

    line: int
    column: int


class ProtocolError(BaseModel):
    """A single entry of a GraphQL response ``errors`` member."""

    model_config = ConfigDict(extra="ignore")

    message: str
    path: list[str | int] | None = None
    locations: list[Location] | None = None
    extensions: dict[str, Any] | None = None

    def __str__(self) -> str:
        if self.path:
            return f"input: {'.'.join(str(p) for p in self.path)} {self.message}"
        return f"input: {self.message}"


_protocol_errors_adapter = TypeAdapter(list[ProtocolError])


class ProtocolErrorList(list):
    """Ordered list of ProtocolError, in server emission order."""

    @classmethod
    def from_raw(cls, raw: Any) -> "ProtocolErrorList":
        """Validate a decoded ``errors`` member.

        Raises:
            pydantic.ValidationError: If the member is not a list of error objects
        """
        return cls(_protocol_errors_adapter.validate_python(raw))

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self]

    def to_json(self) -> list[dict[str, Any]]:
        return [e.model_dump(exclude_none=True) for e in self]

    def __str__(self) -> str:
        return "\n".join(str(e) for e in self)


class NetworkError(BaseModel):
    """Non-2xx HTTP status, with the response body kept for diagnostics."""

    code: int
    message: str


class ErrorResponse(GraphQLClientError):
    """Composite error carrying a network error, GraphQL errors, or both.

    Attributes:
        network_error: Set when the HTTP status code is outside 2xx
        graphql_errors: Set when the server returned at least one GraphQL error
    """

    def __init__(
        self,
        network_error: NetworkError | None = None,
        graphql_errors: ProtocolErrorList | None = None,
    ):
        self.network_error = network_error
        self.graphql_errors = graphql_errors
        super().__init__(network_error, graphql_errors)

    def has_errors(self) -> bool:
        """Return True when at least one error is declared."""
        return self.network_error is not None or bool(self.graphql_errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "networkErrors": self.network_error.model_dump() if self.network_error else None,
            "graphqlErrors": self.graphql_errors.to_json() if self.graphql_errors else None,
        }

    def __str__(self) -> str:
        return json.dumps(self.to_dict())
