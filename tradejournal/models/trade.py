"""Trade data model."""

from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

EntryMethod = Literal["simple", "detailed"]


class Trade(BaseModel):
    """Represents a journaled trade with its computed P&L.

    ``profit`` is in account currency, ``profit_rr`` in risk multiples (R).
    ``account_balance`` is the balance at the time the trade was recorded.
    """

    id: Optional[str] = Field(default=None, description="Opaque record ID")
    pair: str = Field(..., min_length=1, description="Instrument identifier")
    entry_method: EntryMethod = Field(..., description="How the trade was entered")
    entry: Optional[float] = Field(default=None, gt=0, description="Entry price")
    exit: Optional[float] = Field(default=None, gt=0, description="Exit price")
    stop_loss: Optional[float] = Field(default=None, gt=0, description="Stop loss price")
    take_profit: Optional[float] = Field(
        default=None, gt=0, description="Take profit price"
    )
    risk_percent: Optional[float] = Field(
        default=None, gt=0, le=100, description="Percent of balance risked"
    )
    size: float = Field(..., description="Position size (risk amount in simple mode)")
    profit: float = Field(..., description="Signed P&L in account currency")
    profit_rr: float = Field(..., description="Signed P&L in risk multiples")
    is_win: bool = Field(..., description="True when profit is positive")
    date: date_type = Field(..., description="Trade date")
    account_balance: float = Field(
        ..., gt=0, description="Account balance snapshot at trade time"
    )
    account_id: Optional[str] = Field(default=None, description="Owning account ID")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_outcome(self) -> "Trade":
        if self.is_win != (self.profit > 0):
            raise ValueError("is_win must be true exactly when profit is positive")
        if (self.profit > 0) != (self.profit_rr > 0) or (self.profit < 0) != (
            self.profit_rr < 0
        ):
            raise ValueError("profit and profit_rr must have the same sign")
        return self

    def value(self, display_mode: str = "currency") -> float:
        """Return the P&L in the unit selected by ``display_mode``."""
        return self.profit_rr if display_mode == "rr" else self.profit
