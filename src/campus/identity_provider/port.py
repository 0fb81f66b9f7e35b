"""Identity provider port (abstract interface).

Sign-in and sessions live in an external identity service. The campus
domain only needs to create accounts, list them and reset credentials, and
only its onboarding utilities do so.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AccountRecord:
    """An account as the identity provider reports it."""

    account_id: str
    email: str
    role: str
    name: str | None = None


class AccountExistsError(Exception):
    """The identity provider already holds an account for this email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"An account already exists for {email}")


class IdentityProvider(ABC):
    @abstractmethod
    def create_account(self, email: str, password: str, role: str, name: str | None = None) -> AccountRecord:
        """Create an account; raises ``AccountExistsError`` for a taken email."""
        ...

    @abstractmethod
    def list_accounts(self) -> list[AccountRecord]:
        ...

    @abstractmethod
    def update_credentials(self, account_id: str, password: str) -> None:
        ...
