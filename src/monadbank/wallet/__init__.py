"""Wallet providers and session management.

Provides:
- WalletProvider / TransactionSigner: provider interfaces
- LocalWalletProvider: in-memory key backed by web3.py
- SessionManager: the single active connection
"""

from monadbank.wallet.local import LocalWalletProvider, create_wallet_provider
from monadbank.wallet.provider import TransactionSigner, WalletProvider
from monadbank.wallet.session import Session, SessionManager

__all__ = [
    "LocalWalletProvider",
    "Session",
    "SessionManager",
    "TransactionSigner",
    "WalletProvider",
    "create_wallet_provider",
]
