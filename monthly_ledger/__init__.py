"""
Monthly Ledger - Source Package

A personal monthly finance ledger: incomes, expenses, card and loan
installments and savings goals, kept per calendar month.

DESIGN PRINCIPLES:
1. A month that is opened for the first time starts as a copy of the previous one
2. Debt installments are computed, never typed in
3. Fail early, fail visibly
4. A failed save never loses the session's data
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Monthly Ledger Team"
