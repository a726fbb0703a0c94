"""JWT token creation and verification.

Learn: tokens are self-contained. The AuthProfile rides in the claims next to
`iat`/`exp`, so verification needs only the secret. Nothing is stored
server-side, which means there is no revocation list; logging out just
drops the client's cookie.

Claims: sub (= security_id), name, id, email, iat, exp.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog
from pydantic import ValidationError

from pointage.auth.exceptions import TokenEncodingError, TokenInvalidError
from pointage.auth.models import AuthProfile
from pointage.config import settings

logger = structlog.get_logger()


class JWTService:
    """Signs and verifies profile-carrying tokens."""

    def __init__(self, secret: str, expires_in: int, algorithm: str = "HS256"):
        self.secret = secret
        self.expires_in = expires_in
        self.algorithm = algorithm

    def generate_token(self, profile: AuthProfile) -> str:
        """Create a signed token for `profile`, valid for `expires_in` seconds."""
        if profile is None:
            raise TokenEncodingError("Error generating token: profile is null")
        if not self.secret:
            raise TokenEncodingError("Error encoding token: secret is empty")

        now = datetime.now(timezone.utc)
        payload = {
            "sub": profile.security_id,
            "name": profile.name,
            "iat": now,
            "exp": now + timedelta(seconds=self.expires_in),
        }
        if profile.id is not None:
            payload["id"] = profile.id
        if profile.email is not None:
            payload["email"] = profile.email

        try:
            return jwt.encode(payload, self.secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            logger.error("auth.token_encoding_failed", algorithm=self.algorithm, error=str(e))
            raise TokenEncodingError(f"Error encoding token: {e}") from e

    def verify_token(self, token: Optional[str]) -> AuthProfile:
        """Decode `token` and return the embedded profile.

        Every failure (empty, malformed, bad signature, expired) raises
        the same TokenInvalidError.
        """
        if not token or not self.secret:
            raise TokenInvalidError()
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
            return AuthProfile(
                security_id=payload["sub"],
                name=payload.get("name", ""),
                id=payload.get("id"),
                email=payload.get("email"),
            )
        except jwt.ExpiredSignatureError as e:
            logger.debug("auth.token_expired")
            raise TokenInvalidError() from e
        except (jwt.InvalidTokenError, ValidationError) as e:
            logger.debug("auth.token_rejected", error=str(e))
            raise TokenInvalidError() from e


def get_token_service() -> JWTService:
    """Build the token service from process settings."""
    return JWTService(
        secret=settings.jwt_secret,
        expires_in=settings.token_expires_in,
        algorithm=settings.jwt_algorithm,
    )
