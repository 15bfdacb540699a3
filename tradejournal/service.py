"""Journal service.

Ties a signed in user to a record store: loads the profile and trades,
records new trades and keeps the trade-entry defaults in step with the
balance declared on the latest trade.

Store failures are logged and leave the service's state untouched; the
failing call returns ``None`` (or ``False``) instead of raising.
"""

import logging
from datetime import date
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from tradejournal.errors import InvalidInput, StoreFailure
from tradejournal.journal.calendar import project_month
from tradejournal.journal.stats import calculate_stats
from tradejournal.models import (
    Account,
    AccountSettings,
    MonthView,
    Trade,
    TradeStats,
    User,
    UserProfile,
    record_to_trade,
    trade_to_record,
)
from tradejournal.models.record import patch_to_columns
from tradejournal.stores.base import BaseRecordStore

logger = logging.getLogger(__name__)

MAX_ACCOUNT_NAME_LENGTH = 50


class JournalService:
    """Trade journal for one user."""

    def __init__(
        self,
        store: BaseRecordStore,
        user: User,
        defaults: Optional[AccountSettings] = None,
    ):
        """Initialize the service.

        Args:
            store: Record store to read and write.
            user: The signed in user.
            defaults: Settings used until a profile is loaded.
        """
        self.store = store
        self.user = user
        self.defaults = defaults or AccountSettings()
        self.settings = self.defaults
        self.profile: Optional[UserProfile] = None
        self.trades: list[Trade] = []
        self.accounts: list[Account] = []

    # ==================== Loading ====================

    def load(self) -> bool:
        """Load (or create) the profile and all trades.

        Returns:
            True if everything loaded, False if the store failed.
        """
        try:
            profile = self.store.get_user_profile(self.user.id)
            if profile is None:
                profile = self.store.create_user_profile(
                    UserProfile(
                        user_id=self.user.id,
                        email=self.user.email,
                        full_name=self.user.full_name or "",
                        account_balance=self.defaults.balance,
                        default_risk_percent=self.defaults.default_risk_percent,
                    )
                )
            records = self.store.list_trades(self.user.id)
            trades = [record_to_trade(record) for record in records]
        except (StoreFailure, ValidationError) as e:
            logger.error("Error loading journal for %s: %s", self.user.email, e)
            return False

        self.profile = profile
        self.settings = profile.settings()
        self.trades = trades
        return True

    def load_accounts(self) -> list[Account]:
        """Fetch the user's accounts, keeping the previous list on failure."""
        try:
            self.accounts = self.store.list_accounts(self.user.id)
        except StoreFailure as e:
            logger.error("Error fetching accounts: %s", e)
        return self.accounts

    # ==================== Trades ====================

    def add_trade(self, trade: Trade) -> Optional[Trade]:
        """Persist a trade and update the profile defaults from it.

        Args:
            trade: Trade built by the calculator.

        Returns:
            The stored trade, or None if the store failed.
        """
        try:
            record = self.store.create_trade(trade_to_record(trade, self.user.id))
        except StoreFailure as e:
            logger.error("Error creating trade: %s", e)
            return None

        saved = record_to_trade(record)
        self.trades.insert(0, saved)
        logger.info("Recorded %s trade on %s", saved.pair, saved.date)

        self._update_profile(
            {
                "account_balance": trade.account_balance,
                "default_risk_percent": trade.risk_percent
                or self.settings.default_risk_percent,
            }
        )
        return saved

    def update_trade(self, trade_id: str, patch: dict[str, Any]) -> Optional[Trade]:
        """Change fields of a stored trade.

        The patched trade is validated before anything is written, so a
        patch that breaks the trade's outcome rules never reaches the store.

        Args:
            trade_id: ID of the trade.
            patch: ``Trade`` attribute names mapped to new values.

        Returns:
            The updated trade, or None if the trade is unknown or the store
            failed.

        Raises:
            InvalidInput: If the patched trade would be invalid.
        """
        current = next((t for t in self.trades if t.id == trade_id), None)
        if current is None:
            logger.error("Error updating trade %s: trade not found", trade_id)
            return None

        try:
            Trade(**{**current.model_dump(), **patch})
        except ValidationError as e:
            errors = [err["msg"] for err in e.errors()]
            raise InvalidInput("; ".join(errors), errors) from e

        try:
            record = self.store.update_trade(trade_id, patch_to_columns(patch))
            updated = record_to_trade(record)
        except (StoreFailure, ValidationError) as e:
            logger.error("Error updating trade %s: %s", trade_id, e)
            return None

        self.trades = [updated if t.id == trade_id else t for t in self.trades]
        return updated

    def delete_trade(self, trade_id: str) -> bool:
        """Delete a stored trade. Returns True if it was removed."""
        try:
            deleted = self.store.delete_trade(trade_id)
        except StoreFailure as e:
            logger.error("Error deleting trade %s: %s", trade_id, e)
            return False

        if deleted:
            self.trades = [t for t in self.trades if t.id != trade_id]
        return deleted

    def import_trades(self, trades: Iterable[Trade]) -> list[Trade]:
        """Persist imported trades, skipping any the store rejects.

        Returns:
            The trades that were stored.
        """
        stored = []
        for trade in trades:
            try:
                record = self.store.create_trade(trade_to_record(trade, self.user.id))
            except StoreFailure as e:
                logger.error("Error importing %s trade on %s: %s", trade.pair, trade.date, e)
                continue
            stored.append(record_to_trade(record))

        self.trades = sorted(self.trades + stored, key=lambda t: t.date, reverse=True)
        return stored

    def find_trade(self, trade_id: str) -> Optional[Trade]:
        """Find a loaded trade by ID or unique ID prefix."""
        matches = [t for t in self.trades if t.id and t.id.startswith(trade_id)]
        return matches[0] if len(matches) == 1 else None

    # ==================== Views ====================

    def filtered(self, account_id: Optional[str] = None) -> list[Trade]:
        if account_id is None:
            return list(self.trades)
        return [t for t in self.trades if t.account_id == account_id]

    def stats(self, display_mode: str = "currency", account_id: Optional[str] = None) -> TradeStats:
        """Statistics over the loaded trades."""
        return calculate_stats(self.filtered(account_id), display_mode)

    def month(
        self,
        year: int,
        month: int,
        display_mode: str = "currency",
        account_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> MonthView:
        """Calendar view of the loaded trades for one month."""
        return project_month(self.filtered(account_id), year, month, display_mode, today)

    # ==================== Settings ====================

    def _update_profile(self, updates: dict[str, Any]) -> bool:
        if self.profile is None:
            return False
        try:
            profile = self.store.update_user_profile(self.user.id, updates)
        except StoreFailure as e:
            logger.error("Error updating profile: %s", e)
            return False

        self.profile = profile
        self.settings = profile.settings()
        return True

    def update_settings(
        self,
        balance: Optional[float] = None,
        default_risk_percent: Optional[float] = None,
    ) -> bool:
        """Change the declared balance and/or default risk percent.

        Raises:
            InvalidInput: If a value is out of range.
        """
        try:
            AccountSettings(
                balance=self.settings.balance if balance is None else balance,
                default_risk_percent=self.settings.default_risk_percent
                if default_risk_percent is None
                else default_risk_percent,
            )
        except ValidationError as e:
            errors = [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]
            raise InvalidInput("; ".join(errors), errors) from e

        updates: dict[str, Any] = {}
        if balance is not None:
            updates["account_balance"] = balance
        if default_risk_percent is not None:
            updates["default_risk_percent"] = default_risk_percent
        if not updates:
            return True
        return self._update_profile(updates)

    # ==================== Accounts ====================

    def add_account(self, account_name: str, balance: float) -> Optional[Account]:
        """Create a named trading account.

        Raises:
            InvalidInput: If the name is empty or too long, or the balance
                is not positive.
        """
        account_name = account_name.strip()
        if not account_name:
            raise InvalidInput("Please enter an account name")
        if len(account_name) > MAX_ACCOUNT_NAME_LENGTH:
            raise InvalidInput(
                f"Account name must be at most {MAX_ACCOUNT_NAME_LENGTH} characters"
            )
        if not balance > 0:
            raise InvalidInput("Please enter a valid balance")

        try:
            account = self.store.create_account(
                Account(user_id=self.user.id, account_name=account_name, balance=balance)
            )
        except StoreFailure as e:
            logger.error("Error creating account: %s", e)
            return None

        self.accounts.append(account)
        return account

    def remove_account(self, account_id: str) -> bool:
        """Delete an account. Trades keep their account ID."""
        try:
            deleted = self.store.delete_account(account_id)
        except StoreFailure as e:
            logger.error("Error deleting account %s: %s", account_id, e)
            return False

        if deleted:
            self.accounts = [a for a in self.accounts if a.id != account_id]
        return deleted
