"""Verify request lifecycle: submission, pending handle, search."""

from .pending import MAX_CHECK_ATTEMPTS, CheckResult, Match, Mismatch, PendingVerify
from .request import BaseVerify, Psd2Verify, Verify
from .search import search

__all__ = [
    "BaseVerify",
    "CheckResult",
    "MAX_CHECK_ATTEMPTS",
    "Match",
    "Mismatch",
    "PendingVerify",
    "Psd2Verify",
    "Verify",
    "search",
]
