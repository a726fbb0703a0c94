"""Authentication and authorization.

Login path: login/email + password → User → AuthProfile → signed JWT,
handed back in the body and as an HttpOnly `token` cookie.

Request path: `token` cookie or `Authorization: Bearer` header →
JWTAuthenticationStrategy → AuthProfile, then AuthorizationService
decides whether the handler may read or mutate the target resource.
"""
