"""Identity providers for tradejournal."""

from tradejournal.auth.base import SIGNED_IN, SIGNED_OUT, BaseIdentityProvider, Subscription
from tradejournal.auth.local import LocalIdentityProvider

__all__ = [
    "SIGNED_IN",
    "SIGNED_OUT",
    "BaseIdentityProvider",
    "LocalIdentityProvider",
    "Subscription",
]
