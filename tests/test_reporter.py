"""Tests for outcome reporting and error classification."""

from decimal import Decimal

import pytest
from web3.exceptions import ContractLogicError

from monadbank.errors import (
    USER_REJECTED,
    NetworkNotConfigured,
    NotConnected,
    ProviderMissing,
    ProviderRpcError,
    SessionError,
    SubmissionInProgress,
    TransactionReverted,
    ValidationError,
)
from monadbank.intents import (
    DepositIntent,
    IntentKind,
    OutcomeKind,
    RegisterIntent,
    TxOutcome,
    WithdrawIntent,
)
from monadbank.reporter import OutcomeReporter, error_message, extract_reason, revert_reason

from conftest import TX_HASH

REGISTER = RegisterIntent(name="Alice", age=30, married=True)
DEPOSIT = DepositIntent(amount=Decimal("1.5"))
WITHDRAW = WithdrawIntent(amount=Decimal("2"))


class RevertWithReason(Exception):
    """Error shaped like an ethers-style revert with a reason attribute."""

    def __init__(self, message, reason):
        super().__init__(message)
        self.reason = reason


class UnprintableError(Exception):
    def __str__(self):
        raise RuntimeError("cannot render")


def failure(intent, error):
    return TxOutcome(kind=OutcomeKind.FAILURE, intent=intent, detail="failed", error=error)


def success(intent):
    return TxOutcome(kind=OutcomeKind.SUCCESS, intent=intent, detail="confirmed", tx_ref=TX_HASH)


@pytest.fixture
def reporter():
    return OutcomeReporter(native_symbol="MON", registration_fee=Decimal("0.5"))


class TestSuccessMessages:
    """Tests for confirmation strings."""

    def test_register_echoes_inputs(self, reporter):
        message = reporter.report(success(REGISTER))

        assert "Alice" in message
        assert "30" in message
        assert "true" in message

    def test_deposit_echoes_amount(self, reporter):
        assert reporter.report(success(DEPOSIT)) == "💰 Deposited 1.5 MON"

    def test_withdraw_reports_requested_amount_only(self, reporter):
        message = reporter.report(success(WITHDRAW))

        assert "2" in message
        assert "1.96" not in message
        assert message.startswith("💸 Withdrawn 2 MON")


class TestErrorClassification:
    """Tests for the best-effort failure classifier."""

    def test_reason_attribute_is_verbatim(self, reporter):
        error = RevertWithReason("call reverted", reason="Already registered")

        assert reporter.report(failure(REGISTER, error)) == "❌ Registration failed: Already registered"

    def test_contract_logic_error_reason(self, reporter):
        error = ContractLogicError("execution reverted: Insufficient balance")

        assert reporter.report(failure(WITHDRAW, error)) == "❌ Withdrawal failed: Insufficient balance"

    def test_contract_logic_error_without_reason(self, reporter):
        error = ContractLogicError("execution reverted")

        assert reporter.report(failure(WITHDRAW, error)) == "❌ Withdrawal failed"

    def test_insufficient_funds_on_register(self, reporter):
        error = ValueError({"code": -32000, "message": "insufficient funds for gas * price + value"})

        message = reporter.report(failure(REGISTER, error))

        assert message == "❌ Registration failed: Insufficient MON for 0.5 MON fee"

    def test_insufficient_funds_on_deposit(self, reporter):
        error = Exception("Insufficient funds for transfer")

        assert reporter.report(failure(DEPOSIT, error)) == "❌ Deposit failed: Insufficient funds"

    def test_unregistered_deposit(self, reporter):
        error = Exception("VM Exception: User not registered")

        message = reporter.report(failure(DEPOSIT, error))

        assert "Register first" in message
        assert message == "❌ Deposit failed: Register first"

    def test_unregistered_contract_logic_error_on_deposit(self, reporter):
        """A web3 revert naming the missing registration gets the hint."""
        error = ContractLogicError("execution reverted: User not registered")

        assert reporter.report(failure(DEPOSIT, error)) == "❌ Deposit failed: Register first"

    def test_unregistered_contract_logic_error_on_withdraw(self, reporter):
        error = ContractLogicError("execution reverted: User not registered")

        assert reporter.report(failure(WITHDRAW, error)) == "❌ Withdrawal failed: User not registered"

    def test_unregistered_hint_is_deposit_only(self, reporter):
        error = Exception("User not registered")

        assert reporter.report(failure(WITHDRAW, error)) == "❌ Withdrawal failed"

    def test_reason_wins_over_message_match(self, reporter):
        error = RevertWithReason("insufficient funds", reason="Paused")

        assert reporter.report(failure(DEPOSIT, error)) == "❌ Deposit failed: Paused"

    def test_user_rejection_falls_back_to_prefix(self, reporter):
        error = ProviderRpcError(USER_REJECTED, "User rejected the request.")

        assert reporter.report(failure(REGISTER, error)) == "❌ Registration failed"

    def test_reverted_receipt_falls_back_to_prefix(self, reporter):
        error = TransactionReverted("Transaction reverted", tx_ref=TX_HASH)

        assert reporter.report(failure(DEPOSIT, error)) == "❌ Deposit failed"

    def test_missing_error(self, reporter):
        assert reporter.report(failure(DEPOSIT, None)) == "❌ Deposit failed"

    def test_unprintable_error_does_not_raise(self, reporter):
        assert reporter.report(failure(DEPOSIT, UnprintableError())) == "❌ Deposit failed"

    def test_report_is_idempotent(self, reporter):
        outcome = failure(DEPOSIT, Exception("User not registered"))

        assert reporter.report(outcome) == reporter.report(outcome)
        assert reporter.report(success(REGISTER)) == reporter.report(success(REGISTER))

    def test_classify_returns_none_for_unknown(self, reporter):
        assert reporter.classify_error(IntentKind.DEPOSIT, Exception("boom")) is None


class TestHelpers:
    def test_error_message_from_rpc_dict(self):
        error = ValueError({"code": -32000, "message": "nonce too low"})
        assert error_message(error) == "nonce too low"

    def test_error_message_prefers_message_attribute(self):
        error = ProviderRpcError(4100, "Unauthorized")
        assert error_message(error) == "Unauthorized"

    def test_extract_reason_none(self):
        assert extract_reason(None) is None
        assert extract_reason(Exception("execution reverted: nope")) is None
        assert extract_reason(ContractLogicError("execution reverted: nope")) is None

    def test_revert_reason(self):
        assert revert_reason(ContractLogicError("execution reverted: nope")) == "nope"
        assert revert_reason(ContractLogicError("execution reverted")) is None
        assert revert_reason(Exception("execution reverted: nope")) is None
        assert revert_reason(None) is None


class TestLocalErrors:
    """Tests for failures resolved without the provider."""

    def test_validation_error(self, reporter):
        error = ValidationError("age", "Age must be between 1 and 150")
        assert "Age must be between 1 and 150" in reporter.report_local_error(error)

    def test_not_connected(self, reporter):
        assert "Connect wallet first" in reporter.report_local_error(NotConnected("x"))

    def test_in_progress(self, reporter):
        assert reporter.report_local_error(SubmissionInProgress("Deposit")) == "⏳ Deposit already in progress"

    def test_disconnected(self, reporter):
        assert reporter.report_disconnected() == "Wallet disconnected"

    def test_connect_errors(self, reporter):
        assert "install" in reporter.report_connect_error(ProviderMissing("none"))
        assert "Monad Testnet" in reporter.report_connect_error(
            NetworkNotConfigured(10143, "Monad Testnet")
        )
        assert reporter.report_connect_error(SessionError("boom")) == "❌ Wallet connection failed"
