"""Intent and outcome value types."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class IntentKind(str, Enum):
    """Kind of on-chain action a form requests."""

    REGISTER = "register"
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"

    @property
    def label(self) -> str:
        """Operation name for user-facing messages."""
        return {
            IntentKind.REGISTER: "Registration",
            IntentKind.DEPOSIT: "Deposit",
            IntentKind.WITHDRAW: "Withdrawal",
        }[self]


@dataclass(frozen=True)
class RegisterIntent:
    """Register the connected account with profile data."""

    name: str
    age: int
    married: bool

    kind = IntentKind.REGISTER


@dataclass(frozen=True)
class DepositIntent:
    """Deposit native currency into the contract."""

    amount: Decimal

    kind = IntentKind.DEPOSIT


@dataclass(frozen=True)
class WithdrawIntent:
    """Withdraw from the caller's contract balance."""

    amount: Decimal

    kind = IntentKind.WITHDRAW


Intent = Union[RegisterIntent, DepositIntent, WithdrawIntent]


class OutcomeKind(str, Enum):
    """Terminal state of a submission."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class TxOutcome:
    """Result of one submission.

    Attributes:
        kind: SUCCESS or FAILURE
        intent: The intent that was submitted
        detail: Short technical description (for logs)
        tx_ref: Transaction hash, if broadcast succeeded
        error: Raw provider error on failure, used for classification
    """

    kind: OutcomeKind
    intent: Intent
    detail: str = ""
    tx_ref: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def success(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS
