#!/usr/bin/env python3
"""
Splitwise Domain Models

Type-safe models for the parts of the Splitwise API this client uses.
Field names follow the API; amounts stay decimal strings as the API sends
them, with Decimal views for display.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any


def _to_decimal(amount: str) -> Decimal:
    try:
        return Decimal(amount)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e


@dataclass(frozen=True)
class Balance:
    """Amount owed to (positive) or by (negative) a member in one currency."""

    amount: str
    currency_code: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Balance":
        return cls(amount=str(data["amount"]), currency_code=data["currency_code"])

    @property
    def value(self) -> Decimal:
        return _to_decimal(self.amount)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency_code}"


@dataclass
class Member:
    """
    Group member from the get_groups response.

    Balances are listed in API order, one per currency.
    """

    id: int
    first_name: str
    last_name: str
    balances: list[Balance] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Member":
        """
        Create Member from API dict.

        Args:
            data: One entry of a group's "members" array

        Returns:
            Member instance
        """
        return cls(
            id=int(data["id"]),
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            balances=[Balance.from_dict(b) for b in data.get("balance") or []],
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def is_settled(self) -> bool:
        return all(b.value == 0 for b in self.balances)


@dataclass
class Group:
    """Splitwise group with its members in API order."""

    id: int
    name: str
    members: list[Member] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Group":
        return cls(
            id=int(data["id"]),
            name=data.get("name") or "",
            members=[Member.from_dict(m) for m in data.get("members") or []],
        )


@dataclass(frozen=True)
class ExpenseRequest:
    """Parameters for create_expense, sent form-encoded."""

    group_id: int
    cost: str
    description: str
    payment: bool = False
    currency_code: str | None = None

    def to_params(self) -> dict[str, str]:
        params = {
            "group_id": str(self.group_id),
            "cost": self.cost,
            "description": self.description,
            "payment": "1" if self.payment else "0",
        }
        if self.currency_code:
            params["currency_code"] = self.currency_code
        return params


@dataclass(frozen=True)
class Expense:
    """Expense as returned by create_expense."""

    id: int
    description: str
    cost: str
    currency_code: str
    group_id: int | None = None
    payment: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        group_id = data.get("group_id")
        return cls(
            id=int(data["id"]),
            description=data.get("description") or "",
            cost=str(data.get("cost", "")),
            currency_code=data.get("currency_code") or "",
            group_id=int(group_id) if group_id is not None else None,
            payment=bool(data.get("payment", False)),
        )
