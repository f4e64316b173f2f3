"""Schema introspection support.

The introspection query is sent without credentials, so a client can fetch
the schema of an endpoint before it has been configured for authentication.
"""

from typing import Any

from graphql import GraphQLSchema, build_client_schema, get_introspection_query

INTROSPECTION_QUERY = get_introspection_query(descriptions=True)


def is_introspection_query(query: str) -> bool:
    """Whether query is the designated introspection query (exact text match)."""
    return query == INTROSPECTION_QUERY


def build_schema_from_introspection(data: dict[str, Any]) -> GraphQLSchema:
    """Build a client-side schema from the ``data`` of an introspection response."""
    return build_client_schema(data)
