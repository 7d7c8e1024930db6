"""Root conftest: sample drafts and records shared by the test suite."""

from __future__ import annotations

from datetime import date

import pytest

from tripbill.models.billing import BillingDraft, BillingRecord, ServiceLineItem
from tripbill.services.calculator import compute_totals


def _sample_services() -> list[ServiceLineItem]:
    return [
        ServiceLineItem(name="Flight", details="BOM-GOI return, 2 adults", amount=10000),
    ]


def _sample_record(**overrides) -> BillingRecord:
    defaults = dict(
        first_name="Aarav",
        last_name="Sharma",
        contact_number="9876543210",
        email="aarav@example.com",
        customer_id="TM-01TESTCUSTOMER",
        booking_date=date(2025, 1, 5),
        check_in_date=date(2025, 2, 10),
        check_out_date=date(2025, 2, 15),
        hotel_name="Goa Beach Resort",
        room_number="204",
        travel_security=True,
        services=tuple(_sample_services()),
        service_charge=500,
        advanced_amount=3000,
    )
    defaults.update(overrides)
    totals = compute_totals(defaults["services"], defaults["service_charge"], defaults["advanced_amount"])
    return BillingRecord(**defaults, **totals.model_dump())


def _sample_draft(**overrides) -> BillingDraft:
    defaults = dict(
        first_name="Aarav",
        last_name="Sharma",
        contact_number="9876543210",
        email="aarav@example.com",
        booking_date=date(2025, 1, 5),
        check_in_date=date(2025, 2, 10),
        hotel_name="Goa Beach Resort",
        room_number="204",
        services=_sample_services(),
        service_charge=500,
        advanced_amount=3000,
    )
    defaults.update(overrides)
    return BillingDraft(**defaults)


@pytest.fixture()
def sample_record():
    return _sample_record


@pytest.fixture()
def sample_draft():
    return _sample_draft
