"""Request options for customizing outgoing GraphQL requests.

A request option mutates an ``httpx.Request`` before it is sent. Options are
registered on the client (applied to every request) or passed per call, and
always run in registration order: client-wide options first, then per-call
options. Since they mutate headers in place, the last write to a header wins.

Example usage:
    from gql_pyclient.core.options import WithHeader, FunctionOption

    client = GraphQLClient(url, request_options=[WithHeader("X-Tenant", "acme")])

    def trace(request):
        request.headers["X-Request-ID"] = new_request_id()

    await client.post("GetUser", query, User, {"id": 1}, FunctionOption(trace))
"""

from collections.abc import Callable, Iterable
from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class RequestOption(Protocol):
    """Protocol for request options.

    Example:
        class AddTenant(RequestOption):
            def __init__(self, tenant: str):
                self.tenant = tenant

            def apply(self, request: httpx.Request) -> None:
                request.headers["X-Tenant-ID"] = self.tenant
    """

    def apply(self, request: httpx.Request) -> None:
        """Mutate the request in place."""
        ...


class WithHeader:
    """Set (replace) a single header.

    Example:
        option = WithHeader("X-API-Key", "key123")
    """

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value

    def apply(self, request: httpx.Request) -> None:
        request.headers[self.name] = self.value


class WithHeaders:
    """Set (replace) several headers at once."""

    def __init__(self, headers: dict[str, str]):
        self._headers = dict(headers)

    def apply(self, request: httpx.Request) -> None:
        for name, value in self._headers.items():
            request.headers[name] = value


class WithBearerToken:
    """Replace the Authorization header with a fixed bearer token."""

    def __init__(self, token: str):
        self.token = token

    def apply(self, request: httpx.Request) -> None:
        request.headers["Authorization"] = f"Bearer {self.token}"


class FunctionOption:
    """Wrap a plain function ``fn(request)`` as a request option."""

    def __init__(self, fn: Callable[[httpx.Request], None]):
        self.fn = fn

    def apply(self, request: httpx.Request) -> None:
        self.fn(request)


def as_option(option: RequestOption | Callable[[httpx.Request], None]) -> RequestOption:
    """Accept either an option object or a bare callable."""
    if isinstance(option, RequestOption):
        return option
    if callable(option):
        return FunctionOption(option)
    raise TypeError(f"not a request option: {option!r}")


class OptionRunner:
    """Runs client-wide and per-call options in order."""

    def __init__(self, options: Iterable[RequestOption | Callable[[httpx.Request], None]] = ()):
        self.options: list[RequestOption] = [as_option(o) for o in options]

    def add(self, option: RequestOption | Callable[[httpx.Request], None]):
        """Register a client-wide option."""
        self.options.append(as_option(option))

    def run(
        self,
        request: httpx.Request,
        per_call: Iterable[RequestOption | Callable[[httpx.Request], None]] = (),
    ) -> httpx.Request:
        """Apply client-wide options, then per-call options."""
        for option in self.options:
            option.apply(request)
        for option in per_call:
            as_option(option).apply(request)
        return request
