from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator
from ulid import ULID

from tripbill.constants import IST_TZ
from tripbill.settings import settings


def new_service_id() -> str:
    return str(ULID())


def generate_customer_id(prefix: str | None = None) -> str:
    """Display-only customer identifier, e.g. 'TM-01JH3Q...'."""
    if prefix is None:
        prefix = settings.customer_id_prefix
    return f"{prefix}{ULID()}"


def _today() -> date:
    return datetime.now(IST_TZ).date()


class ServiceLineItem(BaseModel):
    """One service row. Rows are replaced, never edited in place."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_service_id)
    name: str = ""
    details: str = ""
    amount: int | None = 0  # whole rupees; None counts as 0


class BillingTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    services_total: int = 0
    total_cost: int = 0
    due_amount: int = 0


class BillingDraft(BaseModel):
    """Mutable form state. Only ``BillingSession.finalize`` turns it into a record."""

    model_config = ConfigDict(validate_assignment=True)

    first_name: str = ""
    last_name: str = ""
    contact_number: str = ""
    email: str = ""
    customer_id: str = Field(default_factory=generate_customer_id)
    booking_date: date | None = Field(default_factory=_today)
    check_in_date: date | None = None
    check_out_date: date | None = None
    hotel_name: str = ""
    room_number: str = ""
    travel_security: bool = False
    services: list[ServiceLineItem] = Field(default_factory=lambda: [ServiceLineItem()])
    service_charge: int | None = 0
    advanced_amount: int | None = 0


class BillingRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    contact_number: str = Field(min_length=10)
    email: str = Field(min_length=3)
    customer_id: str = Field(min_length=1)
    booking_date: date
    check_in_date: date
    check_out_date: date | None = None
    hotel_name: str = ""
    room_number: str = ""
    travel_security: bool = False
    services: tuple[ServiceLineItem, ...] = Field(min_length=1)
    service_charge: int = Field(default=0, ge=0)
    advanced_amount: int = Field(default=0, ge=0)
    services_total: int = Field(default=0, ge=0)
    total_cost: int = Field(default=0, ge=0)
    due_amount: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_totals(self) -> BillingRecord:
        from tripbill.services.calculator import compute_totals

        expected = compute_totals(self.services, self.service_charge, self.advanced_amount)
        if expected != self.totals:
            raise ValueError(f"Derived totals do not match inputs: expected {expected!r}, got {self.totals!r}")
        return self

    @property
    def totals(self) -> BillingTotals:
        return BillingTotals(
            services_total=self.services_total,
            total_cost=self.total_cost,
            due_amount=self.due_amount,
        )

    @property
    def customer_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
