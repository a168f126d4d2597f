"""Concurrency control for form submissions.

Provides per-form locking so a form cannot be resubmitted while its previous
submission is still waiting on the wallet or the network. Different forms
do not block each other.
"""

import asyncio
import logging
from typing import Optional

from monadbank.errors import SubmissionInProgress

logger = logging.getLogger(__name__)

# Global lock registry: form id -> asyncio.Lock
_form_locks: dict[str, asyncio.Lock] = {}


def get_form_lock(form: str) -> asyncio.Lock:
    """Get or create the lock for a form.

    Args:
        form: Form identifier (register, deposit, withdraw)

    Returns:
        asyncio.Lock for the form
    """
    if form not in _form_locks:
        _form_locks[form] = asyncio.Lock()
    return _form_locks[form]


class FormSubmissionLock:
    """Context manager for exclusive, non-waiting access to a form.

    A second submission does not queue behind the first; it fails
    immediately with SubmissionInProgress.

    Example:
        async with FormSubmissionLock("deposit", label="Deposit"):
            outcome = await submitter.submit(session, intent)
    """

    def __init__(self, form: str, label: Optional[str] = None):
        """Initialize the lock.

        Args:
            form: Form identifier
            label: Human-readable operation name for the error message
        """
        self.form = form
        self.label = label or form
        self._lock: Optional[asyncio.Lock] = None
        self._acquired = False

    async def __aenter__(self) -> "FormSubmissionLock":
        """Acquire the lock or fail fast."""
        self._lock = get_form_lock(self.form)

        if self._lock.locked():
            logger.warning(f"Rejected resubmission of {self.form}: still in flight")
            raise SubmissionInProgress(self.label)

        await self._lock.acquire()
        self._acquired = True
        logger.debug(f"Lock acquired for form {self.form}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Release the lock."""
        if self._acquired and self._lock:
            self._lock.release()
            self._acquired = False
            logger.debug(f"Lock released for form {self.form}")
        return False


def is_form_busy(form: str) -> bool:
    """Check whether a form has a submission in flight."""
    lock = _form_locks.get(form)
    return bool(lock and lock.locked())


def clear_form_locks() -> None:
    """Clear all form locks (useful for testing)."""
    _form_locks.clear()
