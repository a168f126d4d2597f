"""Utility modules for monadbank."""

from monadbank.utils.locks import FormSubmissionLock, get_form_lock

__all__ = ["FormSubmissionLock", "get_form_lock"]
