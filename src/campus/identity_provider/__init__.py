"""Identity provider factory.

``get_identity_provider`` defaults to the in-memory fake; deployments install
a real adapter with ``set_identity_provider``.
"""

from campus.identity_provider.fake_adapter import FakeIdentityProvider
from campus.identity_provider.port import IdentityProvider

_current_provider: IdentityProvider | None = None


def get_identity_provider() -> IdentityProvider:
    global _current_provider
    if _current_provider is None:
        _current_provider = FakeIdentityProvider()
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    global _current_provider
    _current_provider = None
