from abc import ABC, abstractmethod


class BaseIdentityVerifier(ABC):
    @abstractmethod
    def verify(self, token: str | None) -> str:
        """Return the user id the token was issued to.

        Raises:
            AuthenticationError: if the token is absent, malformed or expired.
        """
