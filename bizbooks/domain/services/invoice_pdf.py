# bizbooks/domain/services/invoice_pdf.py
"""
Render a stored invoice as a one-page TAX INVOICE PDF.
Uses ReportLab for PDF generation.
"""

from __future__ import annotations

import io
import logging
from datetime import datetime
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from bizbooks.domain.services.currency import format_amount, format_date_in

logger = logging.getLogger("invoice_pdf")

GRID = colors.Color(0.8, 0.8, 0.8)
SHADE = colors.Color(0.95, 0.95, 0.95)
HEADER_BG = colors.Color(0.2, 0.3, 0.5)
TOTAL_BG = colors.Color(0.9, 0.95, 1.0)


def _rs(val) -> str:
    # Helvetica has no rupee glyph
    return f"Rs. {format_amount(val, 2)}"


def generate_invoice_pdf(invoice_data: dict) -> bytes:
    """
    Generate a tax invoice PDF.

    Args:
        invoice_data: Dict with ``invoice`` (invoice fields), ``firm`` and
                      ``client`` (dicts of their fields, may be empty).

    Returns:
        PDF file as bytes.
    """
    invoice = invoice_data.get("invoice") or {}
    firm = invoice_data.get("firm") or {}
    client = invoice_data.get("client") or {}

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"Invoice {invoice.get('invoice_number') or ''}",
    )

    styles = getSampleStyleSheet()
    firm_style = ParagraphStyle(
        "FirmName",
        parent=styles["Heading1"],
        fontSize=18,
        alignment=1,  # center
        spaceAfter=2,
    )
    centered = ParagraphStyle(
        "Centered",
        parent=styles["Normal"],
        fontSize=9,
        alignment=1,
        leading=12,
    )
    title_style = ParagraphStyle(
        "InvoiceTitle",
        parent=styles["Heading2"],
        fontSize=14,
        alignment=1,
        spaceBefore=8,
        spaceAfter=8,
    )
    value_style = ParagraphStyle(
        "Value",
        parent=styles["Normal"],
        fontSize=9,
        leading=12,
    )

    elements = []

    # Letterhead
    elements.append(Paragraph(escape(firm.get("name") or "Unknown Firm"), firm_style))
    for line in (
        firm.get("description"),
        firm.get("present_address") or firm.get("permanent_address"),
        f"Phone: {firm['phone']}" if firm.get("phone") else None,
        f"GSTIN: {firm['gst_number']}" if firm.get("gst_number") else None,
    ):
        if line:
            elements.append(Paragraph(escape(line), centered))

    elements.append(Paragraph("TAX INVOICE", title_style))

    # Invoice + buyer details
    bill_to = "<br/>".join(
        p for p in (
            f"<b>{escape(client.get('name') or 'Unknown Client')}</b>",
            escape(client.get("address") or ""),
            " - ".join(x for x in (client.get("state"), client.get("pincode")) if x),
            f"GSTIN: {client['gst_number']}" if client.get("gst_number") else None,
        ) if p
    )
    header_data = [
        ["Invoice No.", invoice.get("invoice_number") or "N/A", "Bill To", Paragraph(bill_to, value_style)],
        ["Invoice Date", format_date_in(invoice.get("invoice_date")) or "N/A", "", ""],
    ]
    header_table = Table(header_data, colWidths=[75, 130, 55, 220])
    header_table.setStyle(
        TableStyle(
            [
                ("SPAN", (2, 0), (2, 1)),
                ("SPAN", (3, 0), (3, 1)),
                ("BACKGROUND", (0, 0), (0, -1), SHADE),
                ("BACKGROUND", (2, 0), (2, -1), SHADE),
                ("TEXTCOLOR", (0, 0), (0, -1), colors.grey),
                ("TEXTCOLOR", (2, 0), (2, -1), colors.grey),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ("LEFTPADDING", (0, 0), (-1, -1), 8),
            ]
        )
    )
    elements.append(header_table)
    elements.append(Spacer(1, 12))

    # Line item
    item_rows = [
        ["Description", "SAC", "Qty", "Unit", "Rate", "Amount"],
        [
            Paragraph(escape(invoice.get("description") or ""), value_style),
            invoice.get("sac_code") or "",
            f"{invoice.get('quantity', 0)}",
            invoice.get("unit") or "",
            _rs(invoice.get("rate")),
            _rs(invoice.get("total_amount")),
        ],
    ]
    item_table = Table(item_rows, colWidths=[170, 45, 45, 45, 80, 95])
    item_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID),
                ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    elements.append(item_table)
    elements.append(Spacer(1, 12))

    # Tax summary
    gst_rate = invoice.get("gst_rate") or 0
    half = f"{float(gst_rate) / 2:g}%"
    amount_rows = [["", "Amount"]]
    if invoice.get("extra_charges"):
        amount_rows.append(["Add: Extra Charges", _rs(invoice.get("extra_charges"))])
    if invoice.get("extra_deductions"):
        amount_rows.append(["Less: Deductions", _rs(invoice.get("extra_deductions"))])
    amount_rows.append(["Taxable Value", _rs(invoice.get("total_amount"))])
    amount_rows.append([f"CGST @ {half}", _rs(invoice.get("cgst_amount"))])
    amount_rows.append([f"SGST @ {half}", _rs(invoice.get("sgst_amount"))])
    if invoice.get("igst_amount"):
        amount_rows.append([f"IGST @ {float(gst_rate):g}%", _rs(invoice.get("igst_amount"))])
    amount_rows.append(["GRAND TOTAL", _rs(invoice.get("grand_total"))])

    amount_table = Table(amount_rows, colWidths=[300, 180])
    amount_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("BACKGROUND", (0, -1), (-1, -1), TOTAL_BG),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ("LEFTPADDING", (0, 0), (-1, -1), 10),
                ("RIGHTPADDING", (0, 0), (-1, -1), 10),
            ]
        )
    )
    elements.append(amount_table)
    elements.append(Spacer(1, 16))

    # Bank details + signature
    if firm.get("account_number"):
        elements.append(
            Paragraph(
                f"<b>Bank details</b><br/>A/c No: {escape(str(firm['account_number']))}"
                f"<br/>IFSC: {escape(str(firm.get('ifsc_code') or 'N/A'))}",
                value_style,
            )
        )
        elements.append(Spacer(1, 20))

    elements.append(
        Paragraph(
            f"For {escape(firm.get('name') or '')}<br/><br/><br/>{escape(firm.get('proprietor') or 'Authorised Signatory')}",
            ParagraphStyle("Sign", parent=value_style, alignment=2),
        )
    )
    elements.append(Spacer(1, 20))
    elements.append(
        Paragraph(
            f"Computer-generated invoice. Printed on {datetime.now().strftime('%d-%b-%Y %H:%M')}.",
            ParagraphStyle(
                "Footer",
                parent=styles["Normal"],
                fontSize=8,
                textColor=colors.grey,
                alignment=1,
            ),
        )
    )

    doc.build(elements)
    logger.info("Rendered invoice PDF %s", invoice.get("invoice_number"))
    return buf.getvalue()
