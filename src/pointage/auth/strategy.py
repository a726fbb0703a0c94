"""Bearer-token authentication strategy.

Credential extraction order:
1. a `token` cookie, rewritten as "Bearer <value>"
2. the Authorization header, verbatim

The resulting header must start with "Bearer" and split on a single
space into exactly two parts; the second part is the JWT.
"""

from typing import Mapping, Optional

import structlog
from starlette.requests import cookie_parser

from pointage.auth.exceptions import (
    AuthenticationError,
    BadAuthSchemeError,
    MalformedAuthHeaderError,
    MissingAuthHeaderError,
    TokenInvalidError,
)
from pointage.auth.interfaces import UserLookup
from pointage.auth.jwt import JWTService
from pointage.auth.models import AuthenticationMetadata, AuthProfile
from pointage.auth.profile import to_user_profile

logger = structlog.get_logger()

INVALID_AUTH_TOKEN = "INVALID_AUTH_TOKEN"


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup that works for plain dicts too."""
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


class JWTAuthenticationStrategy:
    """Turns request headers into an AuthProfile."""

    def __init__(
        self,
        token_service: JWTService,
        user_lookup: Optional[UserLookup] = None,
        cookie_name: str = "token",
    ):
        self.token_service = token_service
        self.user_lookup = user_lookup
        self.cookie_name = cookie_name

    def _cookie_token(self, headers: Mapping[str, str]) -> Optional[str]:
        cookie = _get_header(headers, "cookie")
        if not cookie:
            return None
        value = cookie_parser(cookie).get(self.cookie_name, "")
        return value.strip().strip('"') or None

    def extract_credentials(self, headers: Mapping[str, str]) -> str:
        """Return the raw JWT from the request or raise an AuthenticationError."""
        cookie_token = self._cookie_token(headers)
        if cookie_token:
            header = f"Bearer {cookie_token}"
        else:
            header = _get_header(headers, "authorization")

        if not header:
            raise MissingAuthHeaderError()
        if not header.startswith("Bearer"):
            raise BadAuthSchemeError()

        parts = header.split(" ")
        if len(parts) != 2:
            raise MalformedAuthHeaderError()
        return parts[1]

    async def authenticate(
        self,
        headers: Mapping[str, str],
        metadata: Optional[AuthenticationMetadata] = None,
    ) -> Optional[AuthProfile]:
        """Authenticate a request.

        Returns None (anonymous) instead of raising when
        metadata.throw_error is False. Raised errors are tagged with
        code INVALID_AUTH_TOKEN and status 401.
        """
        throw_error = metadata is None or metadata.throw_error
        try:
            token = self.extract_credentials(headers)
            profile = self.token_service.verify_token(token)
            if self.user_lookup is not None:
                profile = await self._reload_profile(profile)
            return profile
        except AuthenticationError as e:
            logger.info("auth.rejected", reason=type(e).__name__, detail=e.message)
            if not throw_error:
                return None
            e.code = INVALID_AUTH_TOKEN
            e.status_code = 401
            raise

    async def _reload_profile(self, profile: AuthProfile) -> AuthProfile:
        """Reject tokens whose subject no longer exists."""
        try:
            user_id = int(profile.security_id)
        except ValueError as e:
            raise TokenInvalidError("Invalid token subject.") from e
        user = await self.user_lookup.find_by_id(user_id)
        if not user:
            raise TokenInvalidError("User not found for this token.")
        return to_user_profile(user)
