"""Account, profile and settings data models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_BALANCE = 100000.0
DEFAULT_RISK_PERCENT = 1.0


class AccountSettings(BaseModel):
    """Defaults used to pre-populate new trades."""

    balance: float = Field(default=DEFAULT_BALANCE, gt=0, description="Account balance")
    default_risk_percent: float = Field(
        default=DEFAULT_RISK_PERCENT, gt=0, le=100, description="Default risk percent"
    )

    model_config = {"frozen": True}


class UserProfile(BaseModel):
    """Represents a stored user profile."""

    id: Optional[str] = Field(default=None, description="Record ID")
    user_id: str = Field(..., min_length=1, description="Owning user ID")
    email: str = Field(default="", description="User email")
    full_name: Optional[str] = Field(default=None, description="Display name")
    account_balance: float = Field(default=DEFAULT_BALANCE, description="Declared balance")
    default_risk_percent: float = Field(
        default=DEFAULT_RISK_PERCENT, description="Default risk percent"
    )
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}

    def settings(self) -> AccountSettings:
        """Project the profile onto the trade-entry defaults."""
        return AccountSettings(
            balance=self.account_balance,
            default_risk_percent=self.default_risk_percent,
        )


class Account(BaseModel):
    """Represents a named trading account."""

    id: Optional[str] = Field(default=None, description="Record ID")
    user_id: str = Field(..., min_length=1, description="Owning user ID")
    account_name: str = Field(..., min_length=1, max_length=50, description="Account name")
    balance: float = Field(..., gt=0, description="Account balance")
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}


class User(BaseModel):
    """Authenticated identity handed out by an identity provider."""

    id: str = Field(..., min_length=1, description="Opaque user ID")
    email: str = Field(..., min_length=1, description="User email")
    full_name: Optional[str] = Field(default=None, description="Display name")

    model_config = {"frozen": True}
