"""Spreadsheet and PDF exports of the student payment summary."""

import io
import logging
from typing import List
from xml.sax.saxutils import escape

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .schemas import SUMMARY_HEADERS, StudentSummaryRow

logger = logging.getLogger(__name__)

SUMMARY_SHEET_NAME = "Receipts"
SUMMARY_TITLE = "Student Payment Details"
EXCEL_FILENAME = "Student_Receipts.xlsx"
PDF_FILENAME = "Student_Receipts.pdf"

# Widths in spreadsheet character units (~7 px each): 80, 150, 100, 100, 100, 400 px
EXCEL_COLUMN_WIDTHS = (11.5, 21.5, 14.5, 14.5, 14.5, 57.0)
PDF_COLUMN_WIDTHS_MM = (20, 40, 20, 20, 20, 90)


def build_summary_workbook(rows: List[StudentSummaryRow]) -> bytes:
    """One sheet, header row then one row per student, every cell wrapped."""
    wb = Workbook()
    ws = wb.active
    ws.title = SUMMARY_SHEET_NAME
    ws.append(list(SUMMARY_HEADERS))
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for row in rows:
        ws.append([row.roll_no, row.name or "", row.total_fee, row.total_paid, row.dues_fee, row.receipt_details])

    for idx, width in enumerate(EXCEL_COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width
    wrap = Alignment(wrap_text=True, vertical="top")
    for ws_row in ws.iter_rows():
        for cell in ws_row:
            cell.alignment = wrap

    bio = io.BytesIO()
    wb.save(bio)
    logger.info("Built summary workbook with %d rows", len(rows))
    return bio.getvalue()


def build_summary_pdf(rows: List[StudentSummaryRow]) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=10 * mm,
        rightMargin=10 * mm,
        topMargin=10 * mm,
        bottomMargin=10 * mm,
        title=SUMMARY_TITLE,
    )
    styles = getSampleStyleSheet()
    cell_style = ParagraphStyle("SummaryCell", parent=styles["Normal"], fontSize=8, leading=10)

    data = [list(SUMMARY_HEADERS)]
    for row in rows:
        details = "<br/>".join(escape(line) for line in row.receipt_details.split("\n"))
        data.append([
            row.roll_no,
            Paragraph(escape(row.name or ""), cell_style),
            str(row.total_fee),
            str(row.total_paid),
            str(row.dues_fee),
            Paragraph(details, cell_style),
        ])

    table = Table(data, colWidths=[w * mm for w in PDF_COLUMN_WIDTHS_MM], repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2980B9")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 1),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
        ("LEFTPADDING", (0, 0), (-1, -1), 2),
        ("RIGHTPADDING", (0, 0), (-1, -1), 2),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))

    doc.build([Paragraph(SUMMARY_TITLE, styles["Heading2"]), Spacer(1, 4 * mm), table])
    logger.info("Built summary PDF with %d rows", len(rows))
    return buffer.getvalue()
