"""Local wallet provider.

Holds one private key in memory and talks to known networks over web3.py.
Suitable for:
- Development against a testnet
- Headless use of the form server

WARNING: The private key is stored in memory. Do not use with significant
funds.
"""

import logging
from typing import Any, Optional

from eth_account import Account
from web3 import AsyncWeb3, Web3

from monadbank.config import Settings
from monadbank.errors import (
    UNAUTHORIZED,
    UNRECOGNIZED_CHAIN,
    UNSUPPORTED_METHOD,
    ProviderRpcError,
)
from monadbank.wallet.provider import TransactionSigner, WalletProvider

logger = logging.getLogger(__name__)


class LocalAccountSigner(TransactionSigner):
    """Signer for an in-memory eth_account key."""

    def __init__(self, wallet: "LocalWalletProvider", account):
        self._wallet = wallet
        self._account = account

    @property
    def address(self) -> str:
        return self._account.address

    async def send_transaction(self, tx: dict) -> str:
        """Fill missing fields, sign and broadcast."""
        w3 = self._wallet.web3
        params = dict(tx)
        params["from"] = self.address
        params["to"] = Web3.to_checksum_address(params["to"])

        if "nonce" not in params:
            params["nonce"] = await w3.eth.get_transaction_count(self.address, "pending")

        if "chainId" not in params:
            params["chainId"] = self._wallet.chain_id

        # Reverts with a reason surface here as ContractLogicError
        if "gas" not in params:
            params["gas"] = await w3.eth.estimate_gas(params)

        if "gasPrice" not in params and "maxFeePerGas" not in params:
            params["gasPrice"] = await w3.eth.gas_price

        signed_tx = self._account.sign_transaction(params)
        tx_hash = await w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        tx_hash_hex = Web3.to_hex(tx_hash)

        logger.info(
            "Broadcast %s from %s (nonce=%s)",
            tx_hash_hex,
            self.address[:10] + "...",
            params["nonce"],
        )
        return tx_hash_hex

    async def wait_for_receipt(self, tx_hash: str) -> dict:
        receipt = await self._wallet.web3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self._wallet.receipt_timeout
        )
        return dict(receipt)


class LocalWalletProvider(WalletProvider):
    """EIP-1193 style wallet backed by a local key.

    Args:
        private_key: Hex private key
        networks: Known networks, chain ID -> RPC URL
        chain_id: Initially active chain (defaults to the first known one)
        receipt_timeout: Seconds to wait for a receipt before giving up
    """

    name = "local"

    def __init__(
        self,
        private_key: str,
        networks: dict[int, str],
        chain_id: Optional[int] = None,
        receipt_timeout: float = 120.0,
    ):
        if not networks:
            raise ValueError("LocalWalletProvider needs at least one network")

        super().__init__()
        self._account = Account.from_key(private_key)
        self.networks = dict(networks)
        self.chain_id = chain_id if chain_id is not None else next(iter(self.networks))
        self.receipt_timeout = receipt_timeout
        self._authorized = False
        self._web3: dict[int, AsyncWeb3] = {}

    @property
    def web3(self) -> AsyncWeb3:
        """Lazy load web3 instance for the active chain."""
        if self.chain_id not in self._web3:
            rpc_url = self.networks[self.chain_id]
            self._web3[self.chain_id] = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        return self._web3[self.chain_id]

    async def request(self, method: str, params: Optional[list] = None) -> Any:
        params = params or []

        if method == "eth_chainId":
            return hex(self.chain_id)

        if method == "eth_accounts":
            return [self._account.address] if self._authorized else []

        if method == "eth_requestAccounts":
            # No interactive prompt: holding the key is the authorization
            if not self._authorized:
                self._authorized = True
                self.emit("accountsChanged", [self._account.address])
            return [self._account.address]

        if method == "wallet_revokePermissions":
            if self._authorized:
                self._authorized = False
                self.emit("accountsChanged", [])
            return None

        if method == "wallet_switchEthereumChain":
            return self._switch_chain(params)

        raise ProviderRpcError(UNSUPPORTED_METHOD, f"Method not supported: {method}")

    def _switch_chain(self, params: list) -> None:
        try:
            requested = int(params[0]["chainId"], 16)
        except (IndexError, KeyError, TypeError, ValueError):
            raise ProviderRpcError(-32602, "Invalid chainId parameter")

        if requested not in self.networks:
            raise ProviderRpcError(
                UNRECOGNIZED_CHAIN,
                f"Unrecognized chain ID {hex(requested)}. Try adding the chain first.",
            )

        if requested != self.chain_id:
            logger.info(f"Local wallet switched chain {self.chain_id} -> {requested}")
            self.chain_id = requested
            self.emit("chainChanged", hex(requested))
        return None

    def get_signer(self, account: str) -> TransactionSigner:
        if not self._authorized or account.lower() != self._account.address.lower():
            raise ProviderRpcError(UNAUTHORIZED, f"Account {account} is not authorized")
        return LocalAccountSigner(self, self._account)


def create_wallet_provider(settings: Settings) -> Optional[WalletProvider]:
    """Create the configured wallet provider.

    Returns:
        LocalWalletProvider, or None if no wallet key is configured
    """
    if not settings.has_wallet:
        logger.warning("WALLET_PRIVATE_KEY not set - no wallet provider available")
        return None

    return LocalWalletProvider(
        private_key=settings.wallet_private_key,
        networks={settings.required_chain_id: settings.rpc_url},
        receipt_timeout=settings.receipt_timeout,
    )
