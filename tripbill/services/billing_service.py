from __future__ import annotations

import logging
import re

from tripbill.exceptions import (
    BillingValidationError,
    LastServiceError,
    NoCurrentRecordError,
    ServiceNotFoundError,
)
from tripbill.models.billing import BillingDraft, BillingRecord, BillingTotals, ServiceLineItem
from tripbill.services.calculator import compute_totals

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_CONTACT_LENGTH = 10

_SERVICE_FIELDS = {"name", "details", "amount"}


def validate_draft(draft: BillingDraft) -> dict[str, str]:
    """Return field -> message for every problem that blocks finalization."""
    errors: dict[str, str] = {}

    if not draft.first_name.strip():
        errors["first_name"] = "First name is required"
    if not draft.last_name.strip():
        errors["last_name"] = "Last name is required"
    if len(draft.contact_number.strip()) < MIN_CONTACT_LENGTH:
        errors["contact_number"] = "Valid contact number required"
    if not EMAIL_RE.match(draft.email.strip()):
        errors["email"] = "Valid email required"
    if draft.booking_date is None:
        errors["booking_date"] = "Booking date is required"
    if draft.check_in_date is None:
        errors["check_in_date"] = "Check-in date is required"
    if (draft.service_charge or 0) < 0:
        errors["service_charge"] = "Amount cannot be negative"
    if (draft.advanced_amount or 0) < 0:
        errors["advanced_amount"] = "Amount cannot be negative"

    if not draft.services:
        errors["services"] = "At least one service is required"
    elif any(not service.name.strip() for service in draft.services):
        errors["services"] = "All service names are required"
    for index, service in enumerate(draft.services):
        if (service.amount or 0) < 0:
            errors[f"services[{index}].amount"] = "Amount cannot be negative"

    return errors


class BillingSession:
    """Holds the form draft and at most one finalized record.

    Each finalization replaces ``current_record`` wholesale; the draft stays
    editable so the same booking can be corrected and re-issued.
    """

    def __init__(self, draft: BillingDraft | None = None) -> None:
        self.draft = draft or BillingDraft()
        self.current_record: BillingRecord | None = None

    @property
    def totals(self) -> BillingTotals:
        totals = compute_totals(self.draft.services, self.draft.service_charge, self.draft.advanced_amount)
        logger.debug(
            "Totals recomputed: services=%d total=%d due=%d",
            totals.services_total,
            totals.total_cost,
            totals.due_amount,
        )
        return totals

    def update(self, **fields) -> BillingTotals:
        for name, value in fields.items():
            if name == "services" or name not in BillingDraft.model_fields:
                raise ValueError(f"Unknown draft field: {name}")
            setattr(self.draft, name, value)
        return self.totals

    def _find_service(self, service_id: str) -> int:
        for index, service in enumerate(self.draft.services):
            if service.id == service_id:
                return index
        raise ServiceNotFoundError(service_id)

    def add_service(self, name: str = "", details: str = "", amount: int | None = 0) -> ServiceLineItem:
        service = ServiceLineItem(name=name, details=details, amount=amount)
        self.draft.services.append(service)
        logger.debug("Service row added: id=%s rows=%d", service.id, len(self.draft.services))
        return service

    def update_service(self, service_id: str, **fields) -> BillingTotals:
        unknown = set(fields) - _SERVICE_FIELDS
        if unknown:
            raise ValueError(f"Unknown service field(s): {', '.join(sorted(unknown))}")
        index = self._find_service(service_id)
        current = self.draft.services[index]
        self.draft.services[index] = ServiceLineItem.model_validate({**current.model_dump(), **fields})
        return self.totals

    def remove_service(self, service_id: str) -> BillingTotals:
        index = self._find_service(service_id)
        if len(self.draft.services) <= 1:
            logger.warning("Refused to remove the last service row: id=%s", service_id)
            raise LastServiceError()
        self.draft.services.pop(index)
        logger.debug("Service row removed: id=%s rows=%d", service_id, len(self.draft.services))
        return self.totals

    def finalize(self) -> BillingRecord:
        errors = validate_draft(self.draft)
        if errors:
            logger.warning("Billing validation failed: fields=%s", ",".join(errors))
            raise BillingValidationError(errors)

        draft = self.draft
        totals = self.totals
        record = BillingRecord(
            first_name=draft.first_name.strip(),
            last_name=draft.last_name.strip(),
            contact_number=draft.contact_number.strip(),
            email=draft.email.strip(),
            customer_id=draft.customer_id,
            booking_date=draft.booking_date,
            check_in_date=draft.check_in_date,
            check_out_date=draft.check_out_date,
            hotel_name=draft.hotel_name.strip(),
            room_number=draft.room_number.strip(),
            travel_security=draft.travel_security,
            services=tuple(
                service.model_copy(update={"name": service.name.strip(), "amount": service.amount or 0})
                for service in draft.services
            ),
            service_charge=draft.service_charge or 0,
            advanced_amount=draft.advanced_amount or 0,
            services_total=totals.services_total,
            total_cost=totals.total_cost,
            due_amount=totals.due_amount,
        )
        self.current_record = record
        logger.info(
            "Billing record finalized: customer=%s services=%d total=%d due=%d",
            record.customer_id,
            len(record.services),
            record.total_cost,
            record.due_amount,
        )
        return record

    def require_record(self) -> BillingRecord:
        if self.current_record is None:
            raise NoCurrentRecordError()
        return self.current_record

    def reset(self) -> None:
        """Start a fresh draft. The last finalized record stays available."""
        self.draft = BillingDraft()
        logger.debug("Draft reset: customer=%s", self.draft.customer_id)
