"""Request builder for GraphQL operations.

Turns a query, its variables and the request options into a ready-to-send
``httpx.Request``. The order in which headers are written is:

1. ``Authorization`` from the credential provider (skipped for introspection)
2. client-wide request options, in registration order
3. per-call request options, in registration order
4. ``Content-Type`` and ``Accept``, which replace any value written above

Request event hooks on the ``httpx.AsyncClient`` run at send time, after all
of the above.
"""

import json
import logging
from collections.abc import Iterable
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .auth import CredentialProvider
from .errors import EncodeError, TransportConstructionError
from .introspection import is_introspection_query
from .options import OptionRunner, RequestOption
from .scalars import ScalarRegistry, encode_variables

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class GraphQLRequest(BaseModel):
    """An outgoing GraphQL request envelope."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    variables: dict[str, Any] | None = None
    operation_name: str | None = Field(default=None, alias="operationName")

    @field_validator("query")
    @classmethod
    def _query_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be empty")
        return value

    def to_payload(self) -> dict[str, Any]:
        """The JSON body; empty variables and operation name are omitted."""
        payload: dict[str, Any] = {"query": self.query}
        if self.variables:
            payload["variables"] = self.variables
        if self.operation_name:
            payload["operationName"] = self.operation_name
        return payload

    def encode(self) -> bytes:
        """Serialize the envelope to JSON bytes.

        Raises:
            EncodeError: If a variable cannot be represented as JSON
        """
        try:
            return json.dumps(self.to_payload(), allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodeError(f"encode: {e}") from e


class RequestBuilder:
    """Builds authenticated ``httpx.Request`` objects for one endpoint."""

    def __init__(
        self,
        url: str,
        credentials: CredentialProvider | None = None,
        options: OptionRunner | None = None,
        scalars: ScalarRegistry | None = None,
    ):
        self.url = url
        self.credentials = credentials
        self.options = options or OptionRunner()
        self.scalars = scalars

    def _new_request(self, content: bytes) -> httpx.Request:
        try:
            url = httpx.URL(self.url)
        except (httpx.InvalidURL, TypeError) as e:
            raise TransportConstructionError(f"create request failed: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise TransportConstructionError(
                f"create request failed: unsupported endpoint {self.url!r}"
            )
        return httpx.Request("POST", url, content=content)

    async def build(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
        per_call: Iterable[RequestOption] = (),
    ) -> httpx.Request:
        """Build the request for one GraphQL operation.

        Raises:
            EncodeError: If the envelope cannot be serialized
            TransportConstructionError: If the endpoint URL is malformed
            AuthError: If the credential provider fails
        """
        try:
            envelope = GraphQLRequest(
                query=query,
                variables=encode_variables(variables, self.scalars),
                operation_name=operation_name or None,
            )
        except ValueError as e:
            raise EncodeError(f"encode: {e}") from e

        request = self._new_request(envelope.encode())

        if self.credentials is not None and not is_introspection_query(query):
            credential = await self.credentials.obtain()
            if credential is not None:
                request.headers.update(credential.get_headers())
            else:
                logger.warning(
                    "Identity provider returned no token, sending %s unauthenticated",
                    operation_name or "request",
                )

        self.options.run(request, per_call)

        request.headers["Content-Type"] = JSON_CONTENT_TYPE
        request.headers["Accept"] = JSON_CONTENT_TYPE
        return request
