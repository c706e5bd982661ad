"""Persistence for data produced by lifecycle hooks."""

from .summaries import SessionSummaryStore

__all__ = ["SessionSummaryStore"]
