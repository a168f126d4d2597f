"""Form contracts.

Fields are kept raw: the workflow's validator owns every domain rule, so
these models only fix the field identifiers and accept strings or numbers.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class RegisterForm(BaseModel):
    """Registration form fields."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = Field(None, description="Display name (max 32 chars)")
    age: Optional[str] = Field(None, description="Age, 1 to 150")
    married: Optional[Union[bool, str]] = Field(None, description="Selector value true/false")


class DepositForm(BaseModel):
    """Deposit form fields."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    amount: Optional[str] = Field(None, description="Amount of native currency to deposit")


class WithdrawForm(BaseModel):
    """Withdrawal form fields."""

    model_config = ConfigDict(coerce_numbers_to_str=True, populate_by_name=True)

    withdraw_amount: Optional[str] = Field(
        None, alias="withdrawAmount", description="Amount to withdraw from the contract balance"
    )


class StatusResponse(BaseModel):
    """The single status line after an action."""

    status: str = Field(..., description="User-visible status message")
    address: Optional[str] = Field(None, description="Connected address, if any")
