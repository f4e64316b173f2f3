"""GraphQL client: build, send and reconcile one operation per call.

Example:
    options = ClientOptions(
        base_url="https://api.example.com/graphql",
        authorization=CognitoAuthorizationOptions.from_env(),
    )
    async with GraphQLClient.from_options(options) as client:
        user = await client.post("GetUser", GET_USER, GetUser, {"id": "42"})
"""

import os
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from graphql import GraphQLSchema
from pydantic import BaseModel, Field

from .auth import CognitoCredentialProvider, CredentialProvider, IdentityClient
from .builder import RequestBuilder
from .errors import AuthError
from .introspection import INTROSPECTION_QUERY, build_schema_from_introspection
from .options import OptionRunner, RequestOption
from .reconcile import parse_response
from .scalars import ScalarRegistry
from .transport import TransportExecutor

T = TypeVar("T")


class UseClientDefault:
    """Marks a per-call argument left to the client's setting."""

    def __repr__(self) -> str:
        return "USE_CLIENT_DEFAULT"


USE_CLIENT_DEFAULT = UseClientDefault()

Option = RequestOption | Callable[[httpx.Request], None]


class CognitoAuthorizationOptions(BaseModel):
    """Long-lived secrets used to obtain a bearer token for every request."""

    client_id: str
    user_pool_id: str
    username: str
    password: str = Field(repr=False)
    region: str | None = None

    @classmethod
    def from_env(cls, prefix: str = "COGNITO_") -> "CognitoAuthorizationOptions":
        """Read ``<prefix>CLIENT_ID``, ``USER_POOL_ID``, ``USERNAME``, ``PASSWORD`` and ``REGION``."""
        values = {}
        for name in ("client_id", "user_pool_id", "username", "password"):
            value = (os.getenv(f"{prefix}{name.upper()}") or "").strip()
            if not value:
                raise AuthError(f"{prefix}{name.upper()} is not set or empty")
            values[name] = value
        values["region"] = os.getenv(f"{prefix}REGION") or None
        return cls(**values)


class ClientOptions(BaseModel):
    """Client configuration."""

    base_url: str
    timeout: float | None = 30.0
    request_options: list[Any] = Field(default_factory=list)
    authorization: CognitoAuthorizationOptions | None = None


class GraphQLClient:
    """Sends GraphQL operations to one endpoint.

    The client keeps no state between calls: credentials are fetched for each
    request, so one client can be shared by concurrent tasks.

    Args:
        url: GraphQL endpoint URL
        credentials: Credential provider; None sends requests unauthenticated
        http_client: Client to send with. When omitted, one is created and
            closed by ``close()``; an injected client is left open.
        request_options: Options applied to every request, in order
        timeout: Default per-call deadline in seconds (None for no deadline)
        scalars: Registry used to encode variables
    """

    def __init__(
        self,
        url: str,
        credentials: CredentialProvider | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        request_options: list[Option] | None = None,
        timeout: float | None = 30.0,
        scalars: ScalarRegistry | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._owns_http_client = http_client is None
        # the per-call deadline is enforced by the executor, not by httpx
        self._http_client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(None))
        self._builder = RequestBuilder(
            url,
            credentials=credentials,
            options=OptionRunner(request_options or []),
            scalars=scalars,
        )
        self._executor = TransportExecutor(self._http_client)

    @classmethod
    def from_options(
        cls,
        options: ClientOptions,
        *,
        http_client: httpx.AsyncClient | None = None,
        identity_client: IdentityClient | None = None,
    ) -> "GraphQLClient":
        """Create a client from ClientOptions, wiring Cognito auth when configured."""
        credentials = None
        if options.authorization is not None:
            auth = options.authorization
            credentials = CognitoCredentialProvider(
                auth.client_id,
                auth.user_pool_id,
                auth.username,
                auth.password,
                identity_client=identity_client,
                region=auth.region,
            )
        return cls(
            options.base_url,
            credentials,
            http_client=http_client,
            request_options=options.request_options,
            timeout=options.timeout,
        )

    async def close(self):
        """Close the HTTP client if this client created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "GraphQLClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def post(
        self,
        operation_name: str | None,
        query: str,
        result_type: type[T] | None = None,
        variables: dict[str, Any] | None = None,
        *options: Option,
        timeout: float | None | UseClientDefault = USE_CLIENT_DEFAULT,
    ) -> T | Any:
        """Send a GraphQL operation and decode its ``data`` into result_type.

        Args:
            operation_name: Sent as ``operationName`` when not empty
            query: GraphQL document
            result_type: Type to decode ``data`` into; None returns the raw mapping
            variables: Operation variables
            *options: Per-call request options, applied after the client-wide ones
            timeout: Deadline in seconds for this call; None for no deadline,
                USE_CLIENT_DEFAULT for the client's

        Returns:
            The decoded data

        Raises:
            EncodeError: If the variables cannot be serialized
            TransportConstructionError: If the endpoint URL is malformed
            AuthError: If the credential provider fails
            TransportError: If the request could not be sent in time
            ReadError: If the response body could not be read
            EnvelopeDecodeError: If the response is not a JSON object
            DataDecodeError: If ``data`` does not fit result_type on a 2xx response
            ErrorResponse: On non-2xx status and/or GraphQL errors
        """
        if isinstance(timeout, UseClientDefault):
            timeout = self.timeout
        request = await self._builder.build(query, variables, operation_name, options)
        response = await self._executor.execute(request, timeout)
        return parse_response(response.body, response.status_code, result_type)

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        *options: Option,
        operation_name: str | None = None,
        timeout: float | None | UseClientDefault = USE_CLIENT_DEFAULT,
    ) -> dict[str, Any] | None:
        """Execute a raw GraphQL query and return the ``data`` mapping."""
        return await self.post(operation_name, query, None, variables, *options, timeout=timeout)

    async def introspect(self, *options: Option) -> GraphQLSchema:
        """Fetch the endpoint schema. The introspection query is never authenticated."""
        data = await self.post("IntrospectionQuery", INTROSPECTION_QUERY, dict, None, *options)
        return build_schema_from_introspection(data)
