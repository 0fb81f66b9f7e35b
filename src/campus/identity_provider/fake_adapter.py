"""In-memory identity provider for development and testing."""

from uuid import uuid4

from campus.identity_provider.port import AccountExistsError, AccountRecord, IdentityProvider


class FakeIdentityProvider(IdentityProvider):
    def __init__(self) -> None:
        self.accounts: dict[str, AccountRecord] = {}
        self.passwords: dict[str, str] = {}
        self.calls: list[dict] = []

    def create_account(self, email: str, password: str, role: str, name: str | None = None) -> AccountRecord:
        self.calls.append({"method": "create_account", "email": email, "role": role})
        if any(account.email == email for account in self.accounts.values()):
            raise AccountExistsError(email)

        account = AccountRecord(account_id=str(uuid4()), email=email, role=role, name=name)
        self.accounts[account.account_id] = account
        self.passwords[account.account_id] = password
        return account

    def list_accounts(self) -> list[AccountRecord]:
        self.calls.append({"method": "list_accounts"})
        return list(self.accounts.values())

    def update_credentials(self, account_id: str, password: str) -> None:
        self.calls.append({"method": "update_credentials", "account_id": account_id})
        if account_id not in self.accounts:
            raise KeyError(account_id)
        self.passwords[account_id] = password

    def find_by_email(self, email: str) -> AccountRecord | None:
        return next((account for account in self.accounts.values() if account.email == email), None)
