"""Tests for invoice PDF rendering."""

from datetime import date
from decimal import Decimal

from bizbooks.domain.services.invoice_pdf import generate_invoice_pdf


def _invoice_data(**invoice_overrides):
    invoice = {
        "invoice_number": "KDJ/LHR/24-25/19",
        "invoice_date": date(2025, 1, 2),
        "description": "SAC(Services)/Total Hour(s)",
        "sac_code": "9954",
        "unit": "Hours",
        "rate": Decimal("2000"),
        "quantity": Decimal("88.9"),
        "gst_rate": Decimal("18"),
        "extra_charges": Decimal("0"),
        "extra_deductions": Decimal("0"),
        "total_amount": Decimal("177800"),
        "cgst_amount": Decimal("16002"),
        "sgst_amount": Decimal("16002"),
        "igst_amount": Decimal("0"),
        "grand_total": Decimal("209804"),
    }
    invoice.update(invoice_overrides)
    return {
        "invoice": invoice,
        "firm": {
            "name": "MAA DURGA ENGINEERING",
            "description": "MECHANICAL, ELECTRICAL & CIVIL CONTRACTOR",
            "proprietor": "Prop. Jogendra Mahanta",
            "gst_number": "SBINO010243",
            "permanent_address": "At-Sarbhara, Dist-Keonjhar, Odisha - 758032",
            "phone": "9437240540",
            "account_number": "30383830248",
            "ifsc_code": "SBIN0010243",
        },
        "client": {
            "name": "U.K. ENTERPRISES",
            "address": "JAROLI, JAJANG, BAMEBARI, KEONJHAR",
            "state": "Odisha",
            "pincode": "758034",
            "gst_number": "GSTIN123456789",
        },
    }


class TestGenerateInvoicePdf:

    def test_renders_pdf_bytes(self):
        pdf = generate_invoice_pdf(_invoice_data())
        assert isinstance(pdf, bytes)
        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 1000

    def test_missing_firm_and_client(self):
        data = _invoice_data()
        data["firm"] = {}
        data["client"] = None
        assert generate_invoice_pdf(data).startswith(b"%PDF")

    def test_markup_in_user_text_is_escaped(self):
        data = _invoice_data(description="Pipes <5mm> & fittings")
        assert generate_invoice_pdf(data).startswith(b"%PDF")

    def test_markup_in_bank_details_is_escaped(self):
        data = _invoice_data()
        data["firm"]["account_number"] = "<3038> & 3830"
        data["firm"]["ifsc_code"] = "SBIN<&>0010243"
        assert generate_invoice_pdf(data).startswith(b"%PDF")

    def test_with_extras_and_igst(self):
        data = _invoice_data(extra_charges=Decimal("500"), extra_deductions=Decimal("100"), igst_amount=Decimal("10"))
        assert generate_invoice_pdf(data).startswith(b"%PDF")
