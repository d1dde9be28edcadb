"""
Splitwise API Package

Signed client for the Splitwise v3.0 REST API and the models it returns.
"""

from .client import SplitwiseClient
from .models import Balance, Expense, ExpenseRequest, Group, Member

__all__ = [
    "Balance",
    "Expense",
    "ExpenseRequest",
    "Group",
    "Member",
    "SplitwiseClient",
]
