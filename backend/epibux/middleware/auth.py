"""Bearer-token verification against the identity provider's signing key.

Tokens are issued by the identity provider; this service only checks the
signature and expiry and extracts the subject (the user's uid).
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from epibux.config import settings
from epibux.errors import AuthError

# auto_error=False so a missing header goes through our own error envelope.
security = HTTPBearer(auto_error=False)


class TokenVerifier:
    """Verify identity-provider JWTs and return the subject uid."""

    def __init__(self, secret_key: str, algorithm: str, audience: str = ""):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.audience = audience or None

    def verify(self, token: str) -> str:
        options = {"verify_aud": self.audience is not None}
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                options=options,
            )
        except JWTError:
            raise AuthError("Invalid or expired token")
        uid = payload.get("sub")
        if not uid:
            raise AuthError("Invalid token payload")
        return uid


_verifier = TokenVerifier(settings.AUTH_SECRET_KEY, settings.AUTH_ALGORITHM, settings.AUTH_AUDIENCE)


def get_token_verifier() -> TokenVerifier:
    """FastAPI dependency returning the process-wide verifier."""
    return _verifier


def get_current_uid(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthError("Token is missing.")
    return verifier.verify(credentials.credentials)
