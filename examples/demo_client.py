#!/usr/bin/env python3
"""Demonstration of the GraphQL client.

This script shows how to:
1. Configure Cognito authentication from the environment
2. Fetch the endpoint schema (unauthenticated)
3. Run a typed query and tell network and GraphQL errors apart

Set GRAPHQL_URL and the COGNITO_* variables before running.
"""

import asyncio
import os

from pydantic import BaseModel

from gql_pyclient.core import (
    ClientOptions,
    CognitoAuthorizationOptions,
    ErrorResponse,
    GraphQLClient,
    WithHeader,
)

GET_VIEWER = """
query GetViewer {
  viewer {
    id
    email
  }
}
"""


class Viewer(BaseModel):
    id: str
    email: str | None = None


class GetViewer(BaseModel):
    viewer: Viewer


async def main():
    url = os.getenv("GRAPHQL_URL")
    if not url:
        print("GRAPHQL_URL is not set")
        return

    options = ClientOptions(
        base_url=url,
        authorization=CognitoAuthorizationOptions.from_env(),
        request_options=[WithHeader("X-Client", "gql-pyclient-demo")],
    )

    async with GraphQLClient.from_options(options) as client:
        print("1. Fetching schema...")
        schema = await client.introspect()
        print(f"   {len(schema.type_map)} types")

        print("\n2. Querying viewer...")
        try:
            result = await client.post("GetViewer", GET_VIEWER, GetViewer)
        except ErrorResponse as e:
            if e.network_error:
                print(f"   HTTP {e.network_error.code}")
            for err in e.graphql_errors or []:
                print(f"   GraphQL error: {err.message}")
            return
        print(f"   Logged in as {result.viewer.id}")


if __name__ == "__main__":
    asyncio.run(main())
