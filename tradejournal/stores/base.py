"""Base record store interface for tradejournal."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from tradejournal.models import Account, TradeRecord, UserProfile


class BaseRecordStore(ABC):
    """Abstract base class for record store implementations.

    All stores (SQLite, in-memory, etc.) must inherit from this class and
    implement all abstract methods. Implementations report every failure
    by raising ``StoreFailure``.
    """

    # ==================== Profiles ====================

    @abstractmethod
    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get the profile of a user.

        Args:
            user_id: Owning user ID.

        Returns:
            UserProfile if one exists, None otherwise.
        """
        pass

    @abstractmethod
    def create_user_profile(self, profile: UserProfile) -> UserProfile:
        """Create a user profile.

        Args:
            profile: Profile to create. Its ``id`` is ignored.

        Returns:
            The stored profile with its ID assigned.

        Raises:
            StoreFailure: If the user already has a profile.
        """
        pass

    @abstractmethod
    def update_user_profile(self, user_id: str, updates: dict[str, Any]) -> UserProfile:
        """Update fields of a user's profile.

        Args:
            user_id: Owning user ID.
            updates: Column names mapped to new values.

        Returns:
            The updated profile.

        Raises:
            StoreFailure: If the profile does not exist.
        """
        pass

    # ==================== Trades ====================

    @abstractmethod
    def list_trades(self, user_id: str) -> list[TradeRecord]:
        """Get all trades of a user, newest trade date first.

        Args:
            user_id: Owning user ID.

        Returns:
            List of trade records.
        """
        pass

    @abstractmethod
    def create_trade(self, record: TradeRecord) -> TradeRecord:
        """Persist a new trade.

        Args:
            record: Trade to store. Its ``id`` is ignored.

        Returns:
            The stored record with its ID assigned.
        """
        pass

    @abstractmethod
    def update_trade(self, trade_id: str, patch: dict[str, Any]) -> TradeRecord:
        """Update fields of a stored trade.

        Args:
            trade_id: ID of the trade.
            patch: Column names mapped to new values.

        Returns:
            The updated record.

        Raises:
            StoreFailure: If the trade does not exist.
        """
        pass

    @abstractmethod
    def delete_trade(self, trade_id: str) -> bool:
        """Delete a stored trade.

        Args:
            trade_id: ID of the trade.

        Returns:
            True if a trade was deleted, False if none matched.
        """
        pass

    # ==================== Accounts ====================

    @abstractmethod
    def list_accounts(self, user_id: str) -> list[Account]:
        """Get all accounts of a user, oldest first."""
        pass

    @abstractmethod
    def create_account(self, account: Account) -> Account:
        """Persist a new account and return it with its ID assigned."""
        pass

    @abstractmethod
    def update_account(self, account_id: str, updates: dict[str, Any]) -> Account:
        """Update fields of an account.

        Raises:
            StoreFailure: If the account does not exist.
        """
        pass

    @abstractmethod
    def delete_account(self, account_id: str) -> bool:
        """Delete an account. Returns True if one was deleted."""
        pass
