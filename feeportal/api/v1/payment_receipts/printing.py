"""Printable money receipts (PDF), one receipt per page."""

import io
import logging
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from feeportal.core.config import settings

from .schemas import PaymentReceipt, ReceiptSheet

logger = logging.getLogger(__name__)


def _receipt_flowables(receipt: PaymentReceipt, styles) -> list:
    centered = ParagraphStyle("ReceiptCentered", parent=styles["Normal"], alignment=TA_CENTER)
    heading = ParagraphStyle("ReceiptHeading", parent=styles["Heading2"], alignment=TA_CENTER)
    institution = ParagraphStyle("ReceiptInstitution", parent=styles["Heading3"], alignment=TA_CENTER)

    header = Table(
        [
            [f"Receipt No: {receipt.receipt_number}", f"Date: {receipt.date}"],
            [f"Name: {receipt.student_name or ''}", ""],
            [f"Roll No: {receipt.roll_no or ''}", f"Course: {receipt.course}"],
        ],
        colWidths=[95 * mm, 75 * mm],
    )
    header.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica-Bold"),
        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
    ]))

    body = [["SI No", "Description", "Amount"]]
    for idx, line in enumerate(receipt.lines, start=1):
        body.append([str(idx), line.description, str(line.amount)])
    lines_table = Table(body, colWidths=[20 * mm, 110 * mm, 40 * mm], repeatRows=1)
    lines_table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ("ALIGN", (2, 0), (2, -1), "RIGHT"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
    ]))

    return [
        Paragraph("MONEY RECEIPT", heading),
        Paragraph(f"<b>{escape(settings.institution_name)}</b>", institution),
        Paragraph(escape(settings.institution_address), centered),
        Paragraph(f"Phone No: {escape(settings.institution_phone)}", centered),
        Spacer(1, 6 * mm),
        header,
        Spacer(1, 6 * mm),
        lines_table,
        Spacer(1, 4 * mm),
        Paragraph(f"<b>Received Rupees (in words):</b> {escape(receipt.amount_in_words)}", styles["Normal"]),
        Spacer(1, 12 * mm),
        Paragraph("<b>Thank You</b>", styles["Normal"]),
        Paragraph("<b>Authorized Signature</b>", styles["Normal"]),
    ]


def build_receipts_pdf(sheet: ReceiptSheet) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title=f"Payment Receipt {sheet.payment_id}")
    styles = getSampleStyleSheet()

    elements = []
    for idx, receipt in enumerate(sheet.receipts):
        if idx:
            elements.append(PageBreak())
        elements.extend(_receipt_flowables(receipt, styles))
    if not elements:
        elements.append(Paragraph(escape(sheet.message or "No receipts"), styles["Normal"]))

    doc.build(elements)
    logger.info("Built receipts PDF for payment %s with %d receipts", sheet.payment_id, len(sheet.receipts))
    return buffer.getvalue()
