"""Savings report queries."""

from src.queries.reports import SavingsReporter, overall_totals, summarize_by_month

__all__ = ["SavingsReporter", "overall_totals", "summarize_by_month"]
