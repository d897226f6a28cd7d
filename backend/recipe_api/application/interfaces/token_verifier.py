"""Abstract port for bearer token verification."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CurrentUser:
    """Identity attached to an authenticated request."""

    username: str


class TokenVerifier(ABC):
    """Port for resolving bearer tokens: implemented in the infrastructure layer."""

    @abstractmethod
    def verify(self, token: str) -> CurrentUser | None:
        """Return the user owning ``token``, or None if the token is not accepted."""
        ...
