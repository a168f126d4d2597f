"""Transaction submission.

Submission flow:
1. Check the session is present and on the required chain
2. Build the contract call for the intent
3. Broadcast through the session's signer
4. Wait for the receipt
5. Return a TxOutcome (never raises for provider errors)
"""

import logging
from decimal import Decimal
from typing import Optional

from monadbank.contract import ContractBinding, to_wei
from monadbank.errors import (
    ConfirmationFailed,
    NotConnected,
    TransactionError,
    TransactionRejected,
    TransactionReverted,
)
from monadbank.intents import (
    DepositIntent,
    Intent,
    OutcomeKind,
    RegisterIntent,
    TxOutcome,
    WithdrawIntent,
)
from monadbank.wallet.session import Session

logger = logging.getLogger(__name__)


class TransactionSubmitter:
    """Turns a validated intent into a confirmed contract call.

    Args:
        binding: Contract binding used to encode calls
        required_chain_id: Chain the session must be on
        registration_fee: Exact payment attached to registration
    """

    def __init__(
        self,
        binding: ContractBinding,
        required_chain_id: int,
        registration_fee: Decimal = Decimal("0.5"),
    ):
        self.binding = binding
        self.required_chain_id = required_chain_id
        self.registration_fee = registration_fee

    def build_call(self, intent: Intent) -> dict:
        """Build the unsigned call for an intent."""
        if isinstance(intent, RegisterIntent):
            return self.binding.register_call(
                intent.age, intent.name, intent.married, to_wei(self.registration_fee)
            )
        if isinstance(intent, DepositIntent):
            return self.binding.deposit_call(to_wei(intent.amount))
        if isinstance(intent, WithdrawIntent):
            return self.binding.withdraw_call(to_wei(intent.amount))
        raise TypeError(f"Unsupported intent: {intent!r}")

    async def submit(self, session: Optional[Session], intent: Intent) -> TxOutcome:
        """Submit an intent and wait for confirmation.

        Raises:
            NotConnected: If the session is missing or on the wrong chain.
                Raised before any provider call.

        Returns:
            TxOutcome; provider failures become FAILURE outcomes
        """
        if session is None or session.chain_id != self.required_chain_id:
            raise NotConnected("Connect wallet first")

        try:
            tx_hash = await self._execute(session, intent)
        except TransactionError as e:
            logger.error(f"{intent.kind.label} failed: {e}")
            return TxOutcome(
                kind=OutcomeKind.FAILURE,
                intent=intent,
                detail=str(e),
                tx_ref=e.tx_ref,
                error=e.cause if e.cause is not None else e,
            )
        except Exception as e:
            # Encoding or unit conversion failures
            logger.error(f"{intent.kind.label} could not be built: {e}")
            return TxOutcome(
                kind=OutcomeKind.FAILURE,
                intent=intent,
                detail=str(e),
                error=e,
            )

        logger.info(f"{intent.kind.label} confirmed: {tx_hash}")
        return TxOutcome(
            kind=OutcomeKind.SUCCESS,
            intent=intent,
            detail="confirmed",
            tx_ref=tx_hash,
        )

    async def _execute(self, session: Session, intent: Intent) -> str:
        call = self.build_call(intent)
        signer = session.signer

        logger.info(
            "Submitting %s from %s (value=%s wei)",
            intent.kind.value,
            session.account[:10] + "...",
            call["value"],
        )

        try:
            tx_hash = await signer.send_transaction(call)
        except Exception as e:
            raise TransactionRejected(f"Broadcast failed: {e}", cause=e) from e

        try:
            receipt = await signer.wait_for_receipt(tx_hash)
        except Exception as e:
            raise ConfirmationFailed(
                f"Confirmation failed for {tx_hash}: {e}", cause=e, tx_ref=tx_hash
            ) from e

        if receipt.get("status") == 0:
            raise TransactionReverted(f"Transaction {tx_hash} reverted", tx_ref=tx_hash)

        return tx_hash
