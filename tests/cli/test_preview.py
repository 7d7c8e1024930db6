from io import StringIO

from rich.console import Console

from tripbill.cli.preview import print_preview
from tripbill.models.billing import ServiceLineItem
from tripbill.services.document_builder import build_invoice_document


def _render(document) -> str:
    console = Console(file=StringIO(), width=120, record=True)
    print_preview(document, console)
    return console.export_text()


class TestPreview:
    def test_shows_sections(self, sample_record):
        text = _render(build_invoice_document(sample_record(), brand="Tripomaniac"))
        assert "TRIPOMANIAC" in text
        assert "Customer Details" in text
        assert "Invoice Information" in text
        assert "Aarav Sharma" in text
        assert "TM-01TESTCUSTOMER" in text
        assert "05 Jan 2025" in text
        assert "Goa Beach Resort" in text

    def test_shows_amounts_in_rupees(self, sample_record):
        text = _render(build_invoice_document(sample_record()))
        assert "₹10,000" in text
        assert "₹500" in text
        assert "₹3,000" in text
        assert "₹7,500" in text
        assert "₹10,500" in text
        assert "Total Cost" in text

    def test_indian_grouping(self, sample_record):
        services = (ServiceLineItem(name="Europe tour", details="", amount=150000),)
        text = _render(build_invoice_document(sample_record(services=services, service_charge=0, advanced_amount=0)))
        assert "₹1,50,000" in text

    def test_placeholder_for_missing_trip_name(self, sample_record):
        text = _render(build_invoice_document(sample_record(hotel_name="")))
        assert "Not specified" in text
