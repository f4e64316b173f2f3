"""Credential providers for GraphQL clients.

A credential provider hands out a bearer credential for one request. The
client asks for a fresh one on every non-introspection request; nothing is
cached between calls.

Users can implement custom providers or use the built-in ones.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Protocol, runtime_checkable

from botocore.exceptions import BotoCoreError, ClientError

from .errors import AuthError

logger = logging.getLogger(__name__)

AUTH_FLOW = "ADMIN_USER_PASSWORD_AUTH"


@dataclass(frozen=True)
class Credential:
    """A short-lived bearer credential."""

    bearer_token: str

    def get_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.bearer_token}"}

    def __repr__(self) -> str:
        return "Credential(bearer_token=***)"


@runtime_checkable
class CredentialProvider(Protocol):
    """Protocol for credential providers.

    Implement this protocol to plug in another identity service.

    Example:
        class VaultProvider:
            async def obtain(self) -> Credential | None:
                token = await read_token_from_vault()
                return Credential(token)
    """

    async def obtain(self) -> Credential | None:
        """Return a credential, or None when the identity service gave no token.

        Raises:
            AuthError: If the identity round-trip failed
        """
        ...


@runtime_checkable
class IdentityClient(Protocol):
    """The slice of a boto3 ``cognito-idp`` client that is used."""

    def admin_initiate_auth(self, **kwargs: Any) -> Dict[str, Any]:
        ...


class CognitoCredentialProvider:
    """Obtains an ID token from a Cognito user pool with admin user/password auth.

    Args:
        client_id: App client id
        user_pool_id: User pool id
        username: Username
        password: Password
        identity_client: A ``cognito-idp`` client (created with boto3 when omitted)
        region: AWS region for the created client

    Example:
        provider = CognitoCredentialProvider("abc123", "eu-west-1_XXXX", "svc", "secret")
        credential = await provider.obtain()
    """

    def __init__(
        self,
        client_id: str,
        user_pool_id: str,
        username: str,
        password: str,
        *,
        identity_client: IdentityClient | None = None,
        region: str | None = None,
    ):
        missing = [
            name
            for name, value in (
                ("client_id", client_id),
                ("user_pool_id", user_pool_id),
                ("username", username),
                ("password", password),
            )
            if not value
        ]
        if missing:
            raise AuthError(f"missing Cognito credentials: {', '.join(missing)}")

        self.client_id = client_id
        self.user_pool_id = user_pool_id
        self.username = username
        self._password = password
        self._identity_client = identity_client
        self._region = region

    def _get_identity_client(self) -> IdentityClient:
        if self._identity_client is None:
            import boto3

            self._identity_client = boto3.client("cognito-idp", region_name=self._region)
        return self._identity_client

    def _initiate_auth(self) -> Dict[str, Any]:
        return self._get_identity_client().admin_initiate_auth(
            AuthFlow=AUTH_FLOW,
            ClientId=self.client_id,
            UserPoolId=self.user_pool_id,
            AuthParameters={
                "USERNAME": self.username,
                "PASSWORD": self._password,
            },
        )

    async def obtain(self) -> Credential | None:
        logger.debug("Initiating %s for user %s", AUTH_FLOW, self.username)
        try:
            login = await asyncio.to_thread(self._initiate_auth)
        except (ClientError, BotoCoreError) as e:
            raise AuthError(f"failed to login: {e}") from e

        token = ((login or {}).get("AuthenticationResult") or {}).get("IdToken")
        if not token:
            return None
        return Credential(token)


class StaticCredentialProvider:
    """Hands out the same bearer token every time.

    Example:
        provider = StaticCredentialProvider("eyJhbGciOiJIUzI1NiIs...")
    """

    def __init__(self, token: str):
        if not token:
            raise AuthError("static bearer token is empty")
        self._credential = Credential(token)

    async def obtain(self) -> Credential | None:
        return self._credential
