"""Outcome reporting.

Maps submission outcomes and local failures to the single status line shown
to the user.

Error classification is a best-effort match over free-form provider text.
The order is:
1. an explicit ``reason`` attribute, shown verbatim
2. "insufficient funds" in the message
3. "User not registered" in the message (deposit only)
4. the reason text of a web3 ``ContractLogicError``, shown verbatim
5. fallback: the generic failure prefix alone
"""

import logging
from decimal import Decimal
from typing import Optional

from web3.exceptions import ContractLogicError

from monadbank.errors import (
    NetworkNotConfigured,
    NotConnected,
    ProviderMissing,
    SubmissionInProgress,
    ValidationError,
)
from monadbank.intents import (
    DepositIntent,
    IntentKind,
    RegisterIntent,
    TxOutcome,
    WithdrawIntent,
)

logger = logging.getLogger(__name__)

REVERT_PREFIX = "execution reverted:"
INSUFFICIENT_FUNDS = "insufficient funds"
NOT_REGISTERED = "User not registered"


def error_message(error: Optional[BaseException]) -> str:
    """Best-effort message text of a provider error. Never raises."""
    if error is None:
        return ""
    try:
        message = getattr(error, "message", None)
        if isinstance(message, str) and message:
            return message
        # web3 RPC errors carry the JSON-RPC error object as the first arg
        if error.args and isinstance(error.args[0], dict):
            inner = error.args[0].get("message")
            if isinstance(inner, str):
                return inner
        return str(error)
    except Exception as e:
        logger.debug(f"Could not read error message from {type(error).__name__}: {e}")
        return ""


def extract_reason(error: Optional[BaseException]) -> Optional[str]:
    """Rejection reason the error carries as a ``reason`` attribute."""
    reason = getattr(error, "reason", None)
    if isinstance(reason, str) and reason:
        return reason
    return None


def revert_reason(error: Optional[BaseException]) -> Optional[str]:
    """Reason text after ``execution reverted:`` on a ContractLogicError."""
    if not isinstance(error, ContractLogicError):
        return None
    message = error_message(error)
    if message.startswith(REVERT_PREFIX):
        return message[len(REVERT_PREFIX):].strip() or None
    return None


class OutcomeReporter:
    """Renders outcomes to status strings. Stateless."""

    def __init__(self, native_symbol: str = "MON", registration_fee: Decimal = Decimal("0.5")):
        self.native_symbol = native_symbol
        self.registration_fee = registration_fee

    def classify_error(self, kind: IntentKind, error: Optional[BaseException]) -> Optional[str]:
        """Return the detail to append to the failure prefix, or None."""
        reason = extract_reason(error)
        if reason:
            return reason

        message = error_message(error)

        if INSUFFICIENT_FUNDS in message.lower():
            if kind == IntentKind.REGISTER:
                return (
                    f"Insufficient {self.native_symbol} for "
                    f"{self.registration_fee} {self.native_symbol} fee"
                )
            return "Insufficient funds"

        if kind == IntentKind.DEPOSIT and NOT_REGISTERED in message:
            return "Register first"

        return revert_reason(error)

    def report(self, outcome: TxOutcome) -> str:
        """Render a submission outcome."""
        intent = outcome.intent

        if outcome.success:
            if isinstance(intent, RegisterIntent):
                return (
                    f"✅ Registered {intent.name} "
                    f"(age {intent.age}, married: {str(intent.married).lower()})"
                )
            if isinstance(intent, DepositIntent):
                return f"💰 Deposited {intent.amount} {self.native_symbol}"
            if isinstance(intent, WithdrawIntent):
                return (
                    f"💸 Withdrawn {intent.amount} {self.native_symbol} "
                    f"(contract withdrawal fee applies)"
                )

        message = f"{intent.kind.label} failed"
        detail = self.classify_error(intent.kind, outcome.error)
        if detail:
            message += f": {detail}"
        return f"❌ {message}"

    def report_local_error(self, error: Exception) -> str:
        """Render a failure that never reached the provider."""
        if isinstance(error, ValidationError):
            return f"⚠️ {error.message}"
        if isinstance(error, NotConnected):
            return "⚠️ Connect wallet first"
        if isinstance(error, SubmissionInProgress):
            return f"⏳ {error.form} already in progress"
        return f"❌ {error}"

    def report_connected(self, address: str) -> str:
        return f"✅ Connected: {address}"

    def report_disconnected(self) -> str:
        return "Wallet disconnected"

    def report_connect_error(self, error: Exception) -> str:
        """Render a connect-phase failure."""
        if isinstance(error, ProviderMissing):
            return "🚫 Please install a wallet to use this app"
        if isinstance(error, NetworkNotConfigured):
            name = error.chain_name or hex(error.chain_id)
            return f"🚫 Please add {name} to your wallet"
        return "❌ Wallet connection failed"
