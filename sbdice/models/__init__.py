"""Data models for sbdice outputs."""

from sbdice.models.mapping import BatchReport, DiceReport, PlaceholderMapping, RestoreReport

__all__ = ["BatchReport", "DiceReport", "PlaceholderMapping", "RestoreReport"]
