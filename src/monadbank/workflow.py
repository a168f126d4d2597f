"""Form workflow: Validate -> EnsureSession -> Submit -> Report.

Each public coroutine handles one user action and writes exactly one message
to the status board, overwriting the previous one.
"""

import logging
from typing import Any, Mapping, Optional

from monadbank.config import Settings
from monadbank.contract import ContractBinding
from monadbank.errors import (
    NetworkNotConfigured,
    NotConnected,
    ProviderMissing,
    SessionError,
    SubmissionInProgress,
    ValidationError,
)
from monadbank.intents import IntentKind
from monadbank.reporter import OutcomeReporter
from monadbank.submitter import TransactionSubmitter
from monadbank.utils.locks import FormSubmissionLock
from monadbank.validation import parse_form
from monadbank.wallet.provider import WalletProvider
from monadbank.wallet.session import SessionManager

logger = logging.getLogger(__name__)


class StatusBoard:
    """The single user-visible status line."""

    def __init__(self):
        self.text = ""

    def show(self, message: str) -> str:
        self.text = message
        return message


class DappWorkflow:
    """Orchestrates wallet connection and the three contract forms."""

    def __init__(
        self,
        sessions: SessionManager,
        submitter: TransactionSubmitter,
        reporter: OutcomeReporter,
        status: Optional[StatusBoard] = None,
    ):
        self.sessions = sessions
        self.submitter = submitter
        self.reporter = reporter
        self.status = status or StatusBoard()

    async def connect_wallet(self) -> str:
        """Connect the wallet and show the connected address.

        Raises:
            SessionError: Re-raised after being shown
        """
        try:
            session = await self.sessions.connect()
        except (ProviderMissing, NetworkNotConfigured) as e:
            logger.warning(f"Wallet connection blocked: {e}")
            return self.status.show(self.reporter.report_connect_error(e))
        except SessionError as e:
            self.status.show(self.reporter.report_connect_error(e))
            raise

        return self.status.show(self.reporter.report_connected(session.account))

    def disconnect_wallet(self) -> str:
        self.sessions.disconnect()
        return self.status.show(self.reporter.report_disconnected())

    async def register(self, fields: Mapping[str, Any]) -> str:
        """Handle the registration form (name, age, married)."""
        return await self._handle(IntentKind.REGISTER, fields)

    async def deposit(self, fields: Mapping[str, Any]) -> str:
        """Handle the deposit form (amount)."""
        return await self._handle(IntentKind.DEPOSIT, fields)

    async def withdraw(self, fields: Mapping[str, Any]) -> str:
        """Handle the withdrawal form (withdrawAmount)."""
        return await self._handle(IntentKind.WITHDRAW, fields)

    async def _handle(self, kind: IntentKind, fields: Mapping[str, Any]) -> str:
        try:
            async with FormSubmissionLock(kind.value, label=kind.label):
                intent = parse_form(kind, fields)
                session = self.sessions.require_session()
                outcome = await self.submitter.submit(session, intent)
        except (ValidationError, NotConnected, SubmissionInProgress) as e:
            logger.info(f"{kind.label} stopped before submission: {e}")
            return self.status.show(self.reporter.report_local_error(e))

        return self.status.show(self.reporter.report(outcome))


def create_workflow(
    settings: Settings,
    provider: Optional[WalletProvider] = None,
) -> DappWorkflow:
    """Wire a workflow from settings.

    Args:
        settings: Application settings
        provider: Wallet provider (None means no wallet is available)
    """
    sessions = SessionManager(
        provider,
        required_chain_id=settings.required_chain_id,
        required_chain_name=settings.required_chain_name,
    )
    submitter = TransactionSubmitter(
        ContractBinding(settings.contract_address),
        required_chain_id=settings.required_chain_id,
        registration_fee=settings.registration_fee,
    )
    reporter = OutcomeReporter(
        native_symbol=settings.native_symbol,
        registration_fee=settings.registration_fee,
    )
    return DappWorkflow(sessions, submitter, reporter)
