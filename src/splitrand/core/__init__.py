"""Shared error taxonomy, logging and configuration for splitrand."""

from .errors import ErrorContext, FailureCategory, RandError, err

__all__ = ["ErrorContext", "FailureCategory", "RandError", "err"]
