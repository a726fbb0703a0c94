"""Auth exceptions.

Every error carries a machine-readable `code` and the HTTP status the
API layer should answer with. The exception handler in main.py does the
translation; nothing in the auth package imports FastAPI errors.
"""


class AuthError(Exception):
    """Base class for login, authentication and authorization failures."""

    status_code = 400
    code = "AUTH_ERROR"

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


# ─── Login path ─────────────────────────────────────────


class MissingCredentialsError(AuthError):
    status_code = 422
    code = "MISSING_CREDENTIALS"

    def __init__(self, message: str = "login and password are required."):
        super().__init__(message)


class UserNotFoundError(AuthError):
    status_code = 404
    code = "USER_NOT_FOUND"

    def __init__(self, login: str):
        super().__init__(f"User {login} not found.")
        self.login = login


class InvalidCredentialsError(AuthError):
    status_code = 401
    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "The credentials are not correct."):
        super().__init__(message)


# ─── Request authentication path ────────────────────────


class AuthenticationError(AuthError):
    """A request could not be authenticated.

    Subclasses only differ in their message; clients always see the
    same 401 with code INVALID_AUTH_TOKEN.
    """

    status_code = 401
    code = "INVALID_AUTH_TOKEN"


class MissingAuthHeaderError(AuthenticationError):
    def __init__(self, message: str = "Authorization header not found."):
        super().__init__(message)


class BadAuthSchemeError(AuthenticationError):
    def __init__(self, message: str = "Authorization header is not of type 'Bearer'."):
        super().__init__(message)


class MalformedAuthHeaderError(AuthenticationError):
    def __init__(self, message: str = "Incorrect Authorization header format."):
        super().__init__(message)


class TokenInvalidError(AuthenticationError):
    """Missing, malformed, badly signed or expired token."""

    def __init__(self, message: str = "Invalid authentication token."):
        super().__init__(message)


# ─── Authorization path ─────────────────────────────────


class UnauthorizedError(AuthError):
    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "unauthorized"):
        super().__init__(message)


class NotFoundError(AuthError):
    status_code = 404
    code = "NOT_FOUND"


# ─── Issuance path ──────────────────────────────────────


class TokenEncodingError(AuthError):
    """Signing failed. A server configuration problem, not a client error."""

    status_code = 500
    code = "TOKEN_ENCODING_ERROR"
