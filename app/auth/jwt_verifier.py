import jwt

from app.auth.base import BaseIdentityVerifier
from app.auth.exceptions import AuthenticationError, AuthNotConfiguredError
from app.config.settings import Settings


class JwtIdentityVerifier(BaseIdentityVerifier):
    """Verifies session tokens signed with a shared secret (Supabase-style).

    The user id is the ``sub`` claim. Token issuance happens elsewhere.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        audience: str | None = None,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._audience = audience or None

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtIdentityVerifier":
        return cls(
            secret=settings.auth_jwt_secret,
            algorithm=settings.auth_jwt_algorithm,
            audience=settings.auth_jwt_audience,
        )

    def verify(self, token: str | None) -> str:
        if not self._secret:
            raise AuthNotConfiguredError("Token verification is not configured")
        if not token:
            raise AuthenticationError("Authentication required")
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                options={"require": ["sub"], "verify_aud": self._audience is not None},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError(f"Invalid token: {exc}") from exc

        user_id = claims["sub"]
        if not isinstance(user_id, str) or not user_id.strip():
            raise AuthenticationError("Token subject is empty")
        return user_id
