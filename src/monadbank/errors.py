"""Error taxonomy for the connect and submit workflow.

Local errors (validation, missing session) never touch the network.
Provider-originated errors are wrapped at the submission boundary and keep
the raw provider error in ``cause`` for classification.
"""

from typing import Any, Optional

# EIP-1193 / MetaMask provider error codes
USER_REJECTED = 4001
UNAUTHORIZED = 4100
UNSUPPORTED_METHOD = 4200
UNRECOGNIZED_CHAIN = 4902


class DappError(Exception):
    """Base class for all client errors."""

    pass


class ProviderRpcError(DappError):
    """Error returned by a wallet provider request."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def __repr__(self) -> str:
        return f"ProviderRpcError(code={self.code}, message={self.message!r})"


class ProviderMissing(DappError):
    """No wallet provider is available."""

    pass


class NetworkNotConfigured(DappError):
    """The wallet does not know the required network."""

    def __init__(self, chain_id: int, chain_name: str = ""):
        super().__init__(f"Chain {chain_name or chain_id} is not configured in the wallet")
        self.chain_id = chain_id
        self.chain_name = chain_name


class SessionError(DappError):
    """Any other failure while establishing a session."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class NotConnected(DappError):
    """An action was attempted without an active session."""

    pass


class ValidationError(DappError):
    """User input violates a domain constraint."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class SubmissionInProgress(DappError):
    """The same form already has a submission in flight."""

    def __init__(self, form: str):
        super().__init__(f"{form} submission already in progress")
        self.form = form


class TransactionError(DappError):
    """Submission-phase failure carrying the raw provider error."""

    def __init__(self, message: str, cause: Optional[BaseException] = None, tx_ref: Optional[str] = None):
        super().__init__(message)
        self.cause = cause
        self.tx_ref = tx_ref


class TransactionRejected(TransactionError):
    """Broadcast failed: user declined, gas estimation reverted, no funds."""

    pass


class TransactionReverted(TransactionError):
    """Transaction was mined with a failed status."""

    pass


class ConfirmationFailed(TransactionError):
    """Waiting for the receipt failed (dropped, timed out by the provider)."""

    pass
