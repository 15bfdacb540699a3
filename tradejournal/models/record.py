"""Store-side trade record and its mapping to ``Trade``."""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from tradejournal.models.trade import Trade


class TradeRecord(BaseModel):
    """A trade as persisted by a record store.

    Field names follow the store's column naming, e.g. ``profit_usd``
    holds what ``Trade`` calls ``profit``.
    """

    id: Optional[str] = Field(default=None, description="Record ID")
    user_id: str = Field(..., min_length=1, description="Owning user ID")
    account_id: Optional[str] = Field(default=None, description="Owning account ID")
    pair: str = Field(..., min_length=1, description="Instrument identifier")
    entry_price: Optional[float] = Field(default=None)
    exit_price: Optional[float] = Field(default=None)
    stop_loss: Optional[float] = Field(default=None)
    take_profit: Optional[float] = Field(default=None)
    position_size: float = Field(...)
    profit_usd: float = Field(...)
    profit_rr: float = Field(...)
    is_win: bool = Field(...)
    entry_method: Literal["simple", "detailed"] = Field(...)
    account_balance_at_trade: float = Field(...)
    risk_percent: Optional[float] = Field(default=None)
    trade_date: date = Field(...)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}


# Trade attribute -> record column, for fields whose names differ.
TRADE_TO_RECORD_FIELDS = {
    "entry": "entry_price",
    "exit": "exit_price",
    "size": "position_size",
    "profit": "profit_usd",
    "account_balance": "account_balance_at_trade",
    "date": "trade_date",
}


def trade_to_record(trade: Trade, user_id: str) -> TradeRecord:
    """Build the store record for a trade owned by ``user_id``."""
    return TradeRecord(
        id=trade.id,
        user_id=user_id,
        account_id=trade.account_id,
        pair=trade.pair,
        entry_price=trade.entry,
        exit_price=trade.exit,
        stop_loss=trade.stop_loss,
        take_profit=trade.take_profit,
        position_size=trade.size,
        profit_usd=trade.profit,
        profit_rr=trade.profit_rr,
        is_win=trade.is_win,
        entry_method=trade.entry_method,
        account_balance_at_trade=trade.account_balance,
        risk_percent=trade.risk_percent,
        trade_date=trade.date,
    )


def record_to_trade(record: TradeRecord) -> Trade:
    """Build the in-memory trade for a store record."""
    return Trade(
        id=record.id,
        pair=record.pair,
        entry_method=record.entry_method,
        entry=record.entry_price or None,
        exit=record.exit_price or None,
        stop_loss=record.stop_loss or None,
        take_profit=record.take_profit or None,
        risk_percent=record.risk_percent or None,
        size=record.position_size,
        profit=record.profit_usd,
        profit_rr=record.profit_rr,
        is_win=record.is_win,
        date=record.trade_date,
        account_balance=record.account_balance_at_trade,
        account_id=record.account_id,
    )


def patch_to_columns(patch: dict) -> dict:
    """Rename ``Trade`` attribute keys in an update patch to record columns."""
    return {TRADE_TO_RECORD_FIELDS.get(key, key): value for key, value in patch.items()}
