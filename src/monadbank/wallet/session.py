"""Wallet session management.

Holds the single active connection (account + chain + signer) and enforces
the required chain before anything is submitted.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from monadbank.errors import (
    UNRECOGNIZED_CHAIN,
    NetworkNotConfigured,
    NotConnected,
    ProviderMissing,
    SessionError,
)
from monadbank.wallet.provider import TransactionSigner, WalletProvider

logger = logging.getLogger(__name__)


def _short(address: str) -> str:
    return address[:10] + "..." if len(address) > 10 else address


@dataclass(frozen=True)
class Session:
    """An authorized wallet connection."""

    account: str
    chain_id: int
    signer: TransactionSigner


class SessionManager:
    """Owns the at-most-one active session.

    ``connect()`` replaces the session atomically; submissions only read it.
    """

    def __init__(
        self,
        provider: Optional[WalletProvider],
        required_chain_id: int,
        required_chain_name: str = "",
    ):
        self.provider = provider
        self.required_chain_id = required_chain_id
        self.required_chain_name = required_chain_name
        self._session: Optional[Session] = None

        if provider is not None:
            provider.on("chainChanged", self.handle_chain_changed)
            provider.on("accountsChanged", self.handle_accounts_changed)

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def address(self) -> Optional[str]:
        """Connected address for display, or None."""
        return self._session.account if self._session else None

    async def connect(self) -> Session:
        """Switch to the required chain, authorize an account, build a session.

        Raises:
            ProviderMissing: No wallet provider is available
            NetworkNotConfigured: The wallet does not know the required chain
            SessionError: Any other connect-phase failure
        """
        # A failed reconnect must not leave the previous session usable
        self._session = None

        if self.provider is None:
            raise ProviderMissing("No wallet provider available")

        chain_hex = hex(self.required_chain_id)
        logger.info(f"Connecting wallet ({self.provider.name}) on chain {chain_hex}")

        try:
            await self.provider.request(
                "wallet_switchEthereumChain", [{"chainId": chain_hex}]
            )
        except Exception as e:
            if getattr(e, "code", None) == UNRECOGNIZED_CHAIN:
                logger.warning(f"Wallet does not know chain {chain_hex}")
                raise NetworkNotConfigured(self.required_chain_id, self.required_chain_name)
            logger.error(f"Chain switch failed: {e}")
            raise SessionError(f"Chain switch failed: {e}", cause=e) from e

        try:
            accounts = await self.provider.request("eth_requestAccounts")
        except Exception as e:
            logger.warning(f"Account authorization failed: {e}")
            raise SessionError(f"Account authorization failed: {e}", cause=e) from e

        if not accounts:
            raise SessionError("Wallet returned no accounts")
        account = accounts[0]

        try:
            raw_chain_id = await self.provider.request("eth_chainId")
            chain_id = int(raw_chain_id, 16) if isinstance(raw_chain_id, str) else int(raw_chain_id)
        except Exception as e:
            raise SessionError(f"Could not read active chain: {e}", cause=e) from e

        if chain_id != self.required_chain_id:
            raise SessionError(
                f"Wallet is on chain {hex(chain_id)}, expected {chain_hex}"
            )

        try:
            signer = self.provider.get_signer(account)
        except Exception as e:
            raise SessionError(f"Could not obtain signer: {e}", cause=e) from e

        self._session = Session(account=account, chain_id=chain_id, signer=signer)
        logger.info(f"Wallet connected: {_short(account)} (chain={chain_id})")
        return self._session

    def disconnect(self) -> bool:
        """Drop the active session.

        Returns:
            True if a session was dropped
        """
        if self._session is None:
            return False
        logger.info(f"Wallet disconnected: {_short(self._session.account)}")
        self._session = None
        return True

    def handle_chain_changed(self, chain_id: Union[int, str]) -> None:
        """React to a provider chainChanged event (hex string or int)."""
        if isinstance(chain_id, str):
            chain_id = int(chain_id, 16)
        if self._session and chain_id != self.required_chain_id:
            logger.warning(f"Wallet moved to chain {chain_id}, dropping session")
            self._session = None

    def handle_accounts_changed(self, accounts: list[str]) -> None:
        """React to a provider accountsChanged event."""
        if not self._session:
            return
        if not accounts:
            self.disconnect()
        elif accounts[0].lower() != self._session.account.lower():
            # The signer is bound to the old account
            logger.warning("Wallet switched account, dropping session")
            self._session = None

    def require_session(self) -> Session:
        """Return the active session on the required chain.

        Raises:
            NotConnected: If there is no usable session
        """
        session = self._session
        if session is None or session.chain_id != self.required_chain_id:
            raise NotConnected("Connect wallet first")
        return session
