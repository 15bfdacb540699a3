"""Trade P&L calculations.

Turns raw trade-entry values into fully populated ``Trade`` records.
Two entry methods are supported:

- detailed: entry, exit and stop prices plus the percent of the account
  risked. Position size is derived from the risk amount and the stop
  distance. Trades are treated as long positions, so an exit above entry
  is a profit.
- simple: the outcome is given directly as a risk multiple (R), with
  1R fixed at 1% of the account balance.

Both functions validate everything up front and raise ``InvalidInput``
before any ``Trade`` is built.
"""

import math
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from tradejournal.errors import InvalidInput
from tradejournal.models import Trade

# 1R in simple mode, as a fraction of the account balance
SIMPLE_RISK_FRACTION = 0.01

MAX_PAIR_LENGTH = 20
MIN_RISK_PERCENT = 0.01
MIN_RR_VALUE = -100.0
MAX_RR_VALUE = 1000.0


class _TradeInputBase(BaseModel):
    pair: str = Field(..., description="Instrument identifier")
    account_balance: float = Field(..., gt=0, allow_inf_nan=False)
    trade_date: date = Field(default_factory=date.today)
    account_id: Optional[str] = Field(default=None)

    model_config = {"frozen": True, "str_strip_whitespace": True}

    @field_validator("pair")
    @classmethod
    def _check_pair(cls, value: str) -> str:
        if not value:
            raise ValueError("Trading pair is required")
        if len(value) > MAX_PAIR_LENGTH:
            raise ValueError(
                f"Trading pair must be less than {MAX_PAIR_LENGTH} characters"
            )
        return value

    @field_validator("trade_date")
    @classmethod
    def _check_date(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("Trade date cannot be in the future")
        return value


class DetailedTradeInput(_TradeInputBase):
    """Validated inputs for a price-based trade."""

    entry: float = Field(..., gt=0, allow_inf_nan=False)
    exit: float = Field(..., gt=0, allow_inf_nan=False)
    stop_loss: float = Field(..., gt=0, allow_inf_nan=False)
    take_profit: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    risk_percent: float = Field(..., ge=MIN_RISK_PERCENT, le=100, allow_inf_nan=False)


class SimpleTradeInput(_TradeInputBase):
    """Validated inputs for a risk-multiple trade."""

    rr_value: float = Field(..., ge=MIN_RR_VALUE, le=MAX_RR_VALUE, allow_inf_nan=False)


def _format_errors(exc: ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "input"
        messages.append(f"{field}: {error['msg']}")
    return messages


def _validate(model: type[BaseModel], values: dict[str, Any]) -> Any:
    # None means "not supplied"; let the model apply its default or complain
    supplied = {key: value for key, value in values.items() if value is not None}
    try:
        return model(**supplied)
    except ValidationError as e:
        errors = _format_errors(e)
        raise InvalidInput("; ".join(errors), errors) from e


def risk_amount(account_balance: float, risk_percent: float) -> float:
    """Calculate the currency amount put at risk.

    Args:
        account_balance: Account balance.
        risk_percent: Percent of the balance risked (1 = 1%).

    Returns:
        ``account_balance * risk_percent / 100``.
    """
    return account_balance * risk_percent / 100


def position_size(amount_at_risk: float, entry: float, stop_loss: float) -> float:
    """Calculate the position size that loses ``amount_at_risk`` at the stop.

    Raises:
        InvalidInput: If entry and stop loss are the same price.
    """
    distance = abs(entry - stop_loss)
    if distance == 0:
        raise InvalidInput(
            "Stop loss must differ from entry price",
            ["stop_loss: Stop loss must differ from entry price"],
        )
    return amount_at_risk / distance


def one_r(account_balance: float) -> float:
    """Risk amount represented by 1R in simple mode."""
    return account_balance * SIMPLE_RISK_FRACTION


def _build_trade(**fields: Any) -> Trade:
    try:
        return Trade(**fields)
    except ValidationError as e:
        errors = _format_errors(e)
        raise InvalidInput("; ".join(errors), errors) from e


def calculate_detailed(
    pair: str,
    entry: float,
    exit: float,
    stop_loss: float,
    account_balance: float,
    risk_percent: float,
    trade_date: Optional[date] = None,
    take_profit: Optional[float] = None,
    account_id: Optional[str] = None,
) -> Trade:
    """Build a trade from entry, exit and stop prices.

    Args:
        pair: Instrument identifier, e.g. ``EURUSD``.
        entry: Entry price.
        exit: Exit price.
        stop_loss: Stop loss price.
        account_balance: Account balance at the time of the trade.
        risk_percent: Percent of the balance risked.
        trade_date: Trade date, defaults to today.
        take_profit: Optional take profit price, recorded only.
        account_id: Optional owning account.

    Returns:
        Trade with position size, currency P&L and R multiple filled in.

    Raises:
        InvalidInput: If a value is missing, non-numeric or out of range,
            or the stop loss equals the entry price.
    """
    params = _validate(
        DetailedTradeInput,
        {
            "pair": pair,
            "entry": entry,
            "exit": exit,
            "stop_loss": stop_loss,
            "take_profit": take_profit,
            "account_balance": account_balance,
            "risk_percent": risk_percent,
            "trade_date": trade_date,
            "account_id": account_id,
        },
    )

    amount = risk_amount(params.account_balance, params.risk_percent)
    size = position_size(amount, params.entry, params.stop_loss)
    profit = (params.exit - params.entry) * size

    risk_per_unit = abs(params.entry - params.stop_loss)
    reward_per_unit = abs(params.exit - params.entry)
    profit_rr = reward_per_unit / risk_per_unit
    if params.exit <= params.entry:
        profit_rr = -profit_rr
    if profit_rr == 0:
        profit_rr = 0.0  # drop the sign of -0.0
    if not all(math.isfinite(v) for v in (size, profit, profit_rr)):
        raise InvalidInput(
            "Trade values are out of range",
            ["stop_loss: Stop loss is too close to the entry price for this balance"],
        )

    return _build_trade(
        pair=params.pair,
        entry_method="detailed",
        entry=params.entry,
        exit=params.exit,
        stop_loss=params.stop_loss,
        take_profit=params.take_profit,
        risk_percent=params.risk_percent,
        size=size,
        profit=profit,
        profit_rr=profit_rr,
        is_win=profit > 0,
        date=params.trade_date,
        account_balance=params.account_balance,
        account_id=params.account_id,
    )


def calculate_simple(
    pair: str,
    rr_value: float,
    account_balance: float,
    trade_date: Optional[date] = None,
    account_id: Optional[str] = None,
) -> Trade:
    """Build a trade from its outcome in risk multiples.

    1R is always 1% of ``account_balance``; the configured default risk
    percent does not apply. A zero outcome counts as a non-win.

    Args:
        pair: Instrument identifier.
        rr_value: Outcome in R (2 = won twice the risk, -1 = full loss).
        account_balance: Account balance at the time of the trade.
        trade_date: Trade date, defaults to today.
        account_id: Optional owning account.

    Returns:
        Trade whose ``size`` holds the 1R risk amount.

    Raises:
        InvalidInput: If a value is missing, non-numeric or out of range.
    """
    params = _validate(
        SimpleTradeInput,
        {
            "pair": pair,
            "rr_value": rr_value,
            "account_balance": account_balance,
            "trade_date": trade_date,
            "account_id": account_id,
        },
    )

    risk = one_r(params.account_balance)
    profit = params.rr_value * risk
    if not math.isfinite(profit):
        raise InvalidInput("Profit is out of range", ["rr_value: Profit is out of range"])

    return _build_trade(
        pair=params.pair,
        entry_method="simple",
        size=risk,
        profit=profit,
        profit_rr=params.rr_value,
        is_win=params.rr_value > 0,
        date=params.trade_date,
        account_balance=params.account_balance,
        account_id=params.account_id,
    )
