"""Scoped access tokens for FOXDEN services."""

import logging
import time
from typing import Any, Dict

import jwt

from foxden_doi.errors import AuthError
from foxden_doi.utils.config import Config


logger = logging.getLogger(__name__)


class TokenIssuer:
    """
    Issues short-lived bearer tokens for a user and scope.

    Tokens are HS256 JWTs signed with the authz client id. They are not
    cached: every privileged call asks for a fresh one.
    """

    SCOPES = ("read", "write")
    KIND = "client_credentials"
    ALGORITHM = "HS256"

    def __init__(self, config: Config):
        self.config = config

    def claims(self, user: str, scope: str) -> Dict[str, Any]:
        """Build the claim set for a token."""
        now = int(time.time())
        return {
            "iss": self.config.authz_client_id,
            "iat": now,
            "exp": now + self.config.effective_token_expires,
            "user": user,
            "scope": scope,
            "kind": self.KIND,
            "application": self.config.application,
        }

    def issue(self, user: str, scope: str) -> str:
        """
        Issue a token for user with the given scope.

        Args:
            user: User identity the token acts for
            scope: "read" or "write"

        Returns:
            Encoded bearer token

        Raises:
            AuthError: If the scope is unknown, no client id is configured, or signing fails
        """
        if scope not in self.SCOPES:
            raise AuthError(f"unsupported token scope '{scope}'", user=user, scope=scope)
        if not self.config.authz_client_id:
            raise AuthError("authz client id is not configured", user=user, scope=scope)

        try:
            token = jwt.encode(
                self.claims(user, scope),
                self.config.authz_client_id,
                algorithm=self.ALGORITHM
            )
        except jwt.PyJWTError as e:
            logger.error(f"Unable to sign {scope} token for user {user}: {e}")
            raise AuthError(f"unable to issue {scope} token for user {user}: {e}", user=user, scope=scope) from e

        logger.debug(f"Issued {scope} token for user {user}")
        return token

    def auth_header(self, user: str, scope: str) -> Dict[str, str]:
        """Return an Authorization header carrying a fresh token."""
        return {"Authorization": f"Bearer {self.issue(user, scope)}"}
