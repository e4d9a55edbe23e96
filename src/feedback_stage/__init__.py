"""Feedback Stage: weighted voting and duplicate reconciliation for feedback items."""

__version__ = "0.1.0"
