"""Printable shopping list PDF using ReportLab."""

from __future__ import annotations

from pathlib import Path
from xml.sax.saxutils import escape

from .aggregation.grouping import GroupedList, format_count, format_quantity

EMPTY_MESSAGE = "Add meals to see your shopping list"


def generate_pdf(
    grouped: GroupedList,
    output_path: str | Path,
    *,
    title: str = "Shopping List",
) -> Path:
    """Generate a PDF file from a grouped shopping list.

    Args:
        grouped: The list to render, in display order.
        output_path: Where to save the PDF file.
        title: Heading printed at the top of the page.

    Returns:
        Path to the generated PDF file.

    Raises:
        ImportError: If reportlab is not installed.
    """
    try:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import A4
        from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
        from reportlab.lib.units import mm
        from reportlab.platypus import (
            Paragraph,
            SimpleDocTemplate,
            Spacer,
            Table,
            TableStyle,
        )
    except ImportError:
        raise ImportError("reportlab is required: pip install reportlab")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=title,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ListTitle",
        parent=styles["Title"],
        fontSize=18,
        leading=24,
    )
    subtitle_style = ParagraphStyle(
        "ListSubtitle",
        parent=styles["Normal"],
        fontSize=11,
        leading=15,
        textColor=colors.grey,
    )
    heading_style = ParagraphStyle(
        "CategoryHeading",
        parent=styles["Heading2"],
        fontSize=13,
        leading=18,
        spaceAfter=2 * mm,
    )

    elements: list = []
    elements.append(Paragraph(escape(title), title_style))
    elements.append(Paragraph(format_count(grouped.item_count), subtitle_style))
    elements.append(Spacer(1, 6 * mm))

    if grouped.is_empty:
        elements.append(Paragraph(EMPTY_MESSAGE, styles["Normal"]))
        doc.build(elements)
        return output_path

    table_style = TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("ALIGN", (2, 0), (2, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F1F8E9")]),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
    ])
    col_widths = [95 * mm, 50 * mm, 20 * mm]

    for category, items in grouped:
        elements.append(Paragraph(escape(category), heading_style))
        table_data = [["Item", "Quantity", "Got it"]]
        for item in items:
            table_data.append(
                [item.name, format_quantity(item.quantity, item.unit), "[  ]"]
            )
        t = Table(table_data, colWidths=col_widths)
        t.setStyle(table_style)
        elements.append(t)
        elements.append(Spacer(1, 5 * mm))

    doc.build(elements)
    return output_path
