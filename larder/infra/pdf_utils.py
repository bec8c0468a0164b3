import io
from datetime import date
from typing import Dict, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from larder.domain.ShoppingList import ShoppingList
from larder.utilities.constants import DEFAULT_CATEGORY, UNASSIGNED_STORE_LABEL


def generate_pdf_for_shopping_list(shopping_list: ShoppingList, start: date, end: date,
                                   store_names: Optional[Dict[str, str]] = None) -> bytes:
    """Generate a PDF with one Item / Quantity / Category table per store group."""
    store_names = store_names or {}
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"Shopping List: {start.isoformat()} to {end.isoformat()}", styles["Title"]),
        Spacer(1, 12),
    ]

    if not shopping_list.groups:
        elements.append(Paragraph("Nothing to buy for this period.", styles["Normal"]))

    for store_id, group in shopping_list.groups.items():
        label = store_names.get(store_id, store_id) if store_id else UNASSIGNED_STORE_LABEL
        elements.append(Paragraph(label, styles["Heading2"]))
        data = [["Item", "Quantity", "Category"]]
        for item in group.items:
            data.append([item.display_title or item.canonical_key, item.qty_text or "", item.category or DEFAULT_CATEGORY])
        table = Table(data, repeatRows=1, colWidths=[240, 180, 110])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("ALIGN", (0, 0), (-1, -1), "LEFT"),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, 0), 11),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ]))
        elements.append(table)
        elements.append(Spacer(1, 12))

    if shopping_list.pantry_warnings:
        elements.append(Paragraph("Low stock", styles["Heading2"]))
        for w in shopping_list.pantry_warnings:
            elements.append(Paragraph(w.message, styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()
