"""
Work-Hours Cost Calculator - Source Package

A personal finance helper that answers one question:
"How many hours of my work does this purchase cost?"

DESIGN PRINCIPLES:
1. Incomes are normalised to a single average hourly rate
2. Amounts are shown as working time, never only as money
3. The calculation core is pure and never raises on degenerate input
4. Incomes stay on the device, savings are replicated
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Work-Hours Cost Calculator Team"
