"""Billing arithmetic.

Every function here is pure: totals are always derived from the complete
current input, never accumulated, so ``total_cost == services_total +
service_charge`` and ``due_amount == max(0, total_cost - advanced_amount)``
hold whenever they are observed.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from tripbill.models.billing import BillingTotals

if TYPE_CHECKING:
    from tripbill.models.billing import ServiceLineItem


def services_total(services: Iterable[ServiceLineItem]) -> int:
    return sum((service.amount or 0) for service in services)


def total_cost(services_total: int, service_charge: int | None) -> int:
    return services_total + (service_charge or 0)


def due_amount(total_cost: int, advanced_amount: int | None) -> int:
    # Overpayment is not carried as credit.
    return max(0, total_cost - (advanced_amount or 0))


def compute_totals(
    services: Iterable[ServiceLineItem],
    service_charge: int | None,
    advanced_amount: int | None,
) -> BillingTotals:
    subtotal = services_total(services)
    cost = total_cost(subtotal, service_charge)
    return BillingTotals(
        services_total=subtotal,
        total_cost=cost,
        due_amount=due_amount(cost, advanced_amount),
    )
