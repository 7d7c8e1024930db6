from __future__ import annotations


class BillingValidationError(ValueError):
    """Raised when a draft cannot be finalized. ``errors`` maps field to message."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


class LastServiceError(ValueError):
    def __init__(self) -> None:
        super().__init__("At least one service is required")


class ServiceNotFoundError(ValueError):
    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(f"Service not found: {service_id}")


class NoCurrentRecordError(ValueError):
    def __init__(self) -> None:
        super().__init__("No invoice has been created yet")


class InvoiceExportError(ValueError):
    pass
