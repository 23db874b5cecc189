"""
FinanceFlow - Source Package

A personal finance tracker: record expenses, set monthly budgets per
category, and see where the money went.

DESIGN PRINCIPLES:
1. Every mutation is persisted immediately
2. Analytics are pure functions of (expenses, budgets, reference date)
3. Fail loudly on corrupt stored data
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "FinanceFlow Team"
