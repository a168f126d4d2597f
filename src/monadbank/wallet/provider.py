"""Base interfaces for wallet providers.

Connection flow:
1. Ask the provider to switch to the required chain
2. Ask the user to authorize an account
3. Read back the active chain
4. Obtain a signer bound to the authorized account

Providers follow the EIP-1193 request shape: ``request(method, params)``
resolving to a JSON-like result or raising ``ProviderRpcError``. State
changes are announced through ``chainChanged`` (hex chain ID) and
``accountsChanged`` (list of addresses) events.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class TransactionSigner(ABC):
    """Signing capability bound to one authorized account."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Checksummed address of the bound account."""
        pass

    @abstractmethod
    async def send_transaction(self, tx: dict) -> str:
        """Sign and broadcast a transaction.

        Args:
            tx: Unsigned call with ``to``, ``data`` and ``value`` (wei)

        Returns:
            Transaction hash as 0x-prefixed hex

        Raises:
            Exception: Whatever the provider raises (user rejection,
                gas estimation revert, insufficient funds)
        """
        pass

    @abstractmethod
    async def wait_for_receipt(self, tx_hash: str) -> dict:
        """Wait until the transaction is included.

        Returns:
            Receipt dict with at least ``status`` and ``blockNumber``
        """
        pass


class WalletProvider(ABC):
    """Abstract wallet provider.

    Each wallet backend has its own implementation.
    """

    name: str = "wallet"

    def __init__(self):
        self._listeners: dict[str, list[Callable[[Any], None]]] = {}

    def on(self, event: str, handler: Callable[[Any], None]) -> None:
        """Subscribe to a provider event."""
        self._listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: Callable[[Any], None]) -> None:
        handlers = self._listeners.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: str, payload: Any) -> None:
        """Deliver an event to every subscriber.

        A failing listener is logged and does not stop the others.
        """
        for handler in list(self._listeners.get(event, [])):
            try:
                handler(payload)
            except Exception as e:
                logger.error(f"{event} listener failed: {e}")

    @abstractmethod
    async def request(self, method: str, params: Optional[list] = None) -> Any:
        """Send an EIP-1193 request to the wallet."""
        pass

    @abstractmethod
    def get_signer(self, account: str) -> TransactionSigner:
        """Get a signer for an account previously authorized by the user."""
        pass
