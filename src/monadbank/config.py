"""Application configuration using pydantic-settings.

The client talks to a single contract on a single required network
(Monad Testnet by default).
"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="127.0.0.1", description="Form server host")
    api_port: int = Field(default=8000, description="Form server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # Network
    # ======================
    required_chain_id: int = Field(
        default=10143, description="Chain ID the wallet must be switched to"
    )
    required_chain_name: str = Field(
        default="Monad Testnet", description="Human-readable name of the required chain"
    )
    rpc_url: str = Field(
        default="https://testnet-rpc.monad.xyz", description="RPC URL of the required chain"
    )
    native_symbol: str = Field(default="MON", description="Native currency symbol")

    # ======================
    # Contract
    # ======================
    contract_address: str = Field(default="", description="Deployed contract address")
    registration_fee: Decimal = Field(
        default=Decimal("0.5"),
        description="Exact payment required by the registration entry point",
    )

    # ======================
    # Local wallet provider
    # ======================
    wallet_private_key: Optional[str] = Field(
        default=None, description="Private key for the local wallet provider"
    )
    receipt_timeout: float = Field(
        default=120.0, description="Seconds the local wallet waits for a receipt"
    )

    @property
    def required_chain_hex(self) -> str:
        """Required chain ID in the hex form wallets expect."""
        return hex(self.required_chain_id)

    @property
    def has_wallet(self) -> bool:
        """Check if a local wallet key is configured."""
        return bool(self.wallet_private_key)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "chain": {
                "id": self.required_chain_id,
                "hex": self.required_chain_hex,
                "name": self.required_chain_name,
                "rpc": self.rpc_url,
                "symbol": self.native_symbol,
            },
            "contract_address": self.contract_address or "(not set)",
            "registration_fee": str(self.registration_fee),
            "wallet_private_key": "***" if self.wallet_private_key else "(not set)",
            "receipt_timeout": self.receipt_timeout,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
