"""Contract binding for the accounts contract.

Builds unsigned calls for the three entry points. Encoding is done locally
from the ABI; nothing here talks to the network.
"""

from decimal import Decimal

from web3 import Web3

CONTRACT_ABI = [
    {
        "type": "function",
        "name": "setUserInfo",
        "stateMutability": "payable",
        "inputs": [
            {"name": "age", "type": "uint256"},
            {"name": "name", "type": "string"},
            {"name": "married", "type": "bool"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "makeDeposit",
        "stateMutability": "payable",
        "inputs": [],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "withdrawMyBalance",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "amount", "type": "uint256"}],
        "outputs": [],
    },
]


def to_wei(amount: Decimal) -> int:
    """Convert a native-currency amount to wei."""
    return int(Web3.to_wei(amount, "ether"))


def from_wei(value: int) -> Decimal:
    """Convert wei to a native-currency amount."""
    return Decimal(Web3.from_wei(value, "ether"))


class ContractBinding:
    """ABI-driven binding to the deployed contract."""

    def __init__(self, address: str):
        if not address:
            raise ValueError("Contract address is not configured")
        self.address = Web3.to_checksum_address(address)
        self._contract = Web3().eth.contract(address=self.address, abi=CONTRACT_ABI)

    def _call(self, fn_name: str, args: list, value: int = 0) -> dict:
        return {
            "to": self.address,
            "data": self._contract.encode_abi(fn_name, args=args),
            "value": value,
        }

    def register_call(self, age: int, name: str, married: bool, fee_wei: int) -> dict:
        """setUserInfo(age, name, married) paying the registration fee."""
        return self._call("setUserInfo", [age, name, married], value=fee_wei)

    def deposit_call(self, amount_wei: int) -> dict:
        """makeDeposit() paying the deposited amount."""
        return self._call("makeDeposit", [], value=amount_wei)

    def withdraw_call(self, amount_wei: int) -> dict:
        """withdrawMyBalance(amount); the amount is an argument, not a payment."""
        return self._call("withdrawMyBalance", [amount_wei])
