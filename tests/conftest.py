"""Pytest configuration and fixtures."""

import os
from typing import Any, Optional

import pytest
import pytest_asyncio

CONTRACT_ADDRESS = "0x1111111111111111111111111111111111111111"
ACCOUNT = "0xAbC0000000000000000000000000000000000001"
OTHER_ACCOUNT = "0xAbC0000000000000000000000000000000000002"
TX_HASH = "0x" + "ab" * 32
REQUIRED_CHAIN_ID = 10143

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"
os.environ["CONTRACT_ADDRESS"] = CONTRACT_ADDRESS
os.environ["REQUIRED_CHAIN_ID"] = str(REQUIRED_CHAIN_ID)
os.environ.pop("WALLET_PRIVATE_KEY", None)

from monadbank.config import Settings
from monadbank.errors import UNSUPPORTED_METHOD, ProviderRpcError
from monadbank.utils.locks import clear_form_locks
from monadbank.wallet.provider import TransactionSigner, WalletProvider
from monadbank.workflow import create_workflow


class FakeSigner(TransactionSigner):
    """Signer that records calls and fails on demand."""

    def __init__(self, address: str = ACCOUNT, tx_hash: str = TX_HASH):
        self._address = address
        self.tx_hash = tx_hash
        self.send_error: Optional[BaseException] = None
        self.wait_error: Optional[BaseException] = None
        self.receipt = {"status": 1, "blockNumber": 100, "transactionHash": tx_hash}
        self.sent: list[dict] = []
        self.waited: list[str] = []

    @property
    def address(self) -> str:
        return self._address

    async def send_transaction(self, tx: dict) -> str:
        self.sent.append(tx)
        if self.send_error:
            raise self.send_error
        return self.tx_hash

    async def wait_for_receipt(self, tx_hash: str) -> dict:
        self.waited.append(tx_hash)
        if self.wait_error:
            raise self.wait_error
        return self.receipt


class FakeWalletProvider(WalletProvider):
    """In-memory EIP-1193 provider that records every request."""

    name = "fake"

    def __init__(
        self,
        chain_id: int = 1,
        accounts: Optional[list[str]] = None,
        switch_error: Optional[BaseException] = None,
        accounts_error: Optional[BaseException] = None,
        ignore_switch: bool = False,
    ):
        super().__init__()
        self.chain_id = chain_id
        self.accounts = [ACCOUNT] if accounts is None else accounts
        self.switch_error = switch_error
        self.accounts_error = accounts_error
        self.ignore_switch = ignore_switch
        self.signer = FakeSigner()
        self.calls: list[str] = []

    async def request(self, method: str, params: Optional[list] = None) -> Any:
        self.calls.append(method)

        if method == "wallet_switchEthereumChain":
            if self.switch_error:
                raise self.switch_error
            requested = int(params[0]["chainId"], 16)
            if not self.ignore_switch and requested != self.chain_id:
                self.chain_id = requested
                self.emit("chainChanged", hex(requested))
            return None

        if method == "eth_requestAccounts":
            if self.accounts_error:
                raise self.accounts_error
            return list(self.accounts)

        if method == "eth_chainId":
            return hex(self.chain_id)

        raise ProviderRpcError(UNSUPPORTED_METHOD, f"Method not supported: {method}")

    def get_signer(self, account: str) -> TransactionSigner:
        self.calls.append("get_signer")
        return self.signer


@pytest.fixture(autouse=True)
def reset_form_locks():
    """Clear form locks before each test."""
    clear_form_locks()
    yield
    clear_form_locks()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        contract_address=CONTRACT_ADDRESS,
        required_chain_id=REQUIRED_CHAIN_ID,
        required_chain_name="Monad Testnet",
        native_symbol="MON",
    )


@pytest.fixture
def provider() -> FakeWalletProvider:
    return FakeWalletProvider()


@pytest.fixture
def make_provider():
    """Factory for providers with custom behaviour."""
    return FakeWalletProvider


@pytest.fixture
def workflow(settings, provider):
    """Workflow wired to the fake provider, not yet connected."""
    return create_workflow(settings, provider)


@pytest_asyncio.fixture
async def connected_workflow(workflow, provider):
    """Workflow with an active session on the required chain."""
    await workflow.connect_wallet()
    provider.calls.clear()
    return workflow
