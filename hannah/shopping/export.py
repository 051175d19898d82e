"""Plain-text renderings of the grouped shopping list."""

from __future__ import annotations

from urllib.parse import quote

from .aggregation.grouping import GroupedList, format_quantity

CLIPBOARD_HEADER = "Shopping List"
EMAIL_HEADER = "My Shopping List from Hannah.health"
EMAIL_FOOTER = "View your meal plan at: hannah.health"
EMAIL_SUBJECT = "My Shopping List - Hannah.health"

# Left unescaped by encodeURIComponent besides the unreserved set
_URI_SAFE = "!'()*"


def _category_blocks(grouped: GroupedList) -> str:
    text = ""
    for category, items in grouped:
        text += f"{category}:\n"
        for item in items:
            text += f"• {item.name} - {format_quantity(item.quantity, item.unit)}\n"
        text += "\n"
    return text


def clipboard_text(grouped: GroupedList, *, header: str = CLIPBOARD_HEADER) -> str:
    """Bill-style list: header, then ``Category:`` blocks of ``• name - qty`` lines."""
    return f"{header}\n\n" + _category_blocks(grouped)


def email_body(
    grouped: GroupedList,
    *,
    header: str = EMAIL_HEADER,
    footer: str = EMAIL_FOOTER,
) -> str:
    body = f"{header}\n\n" + _category_blocks(grouped)
    if footer:
        body += f"\n{footer}"
    return body


def mailto_url(
    grouped: GroupedList,
    *,
    subject: str = EMAIL_SUBJECT,
    header: str = EMAIL_HEADER,
    footer: str = EMAIL_FOOTER,
) -> str:
    body = email_body(grouped, header=header, footer=footer)
    return f"mailto:?subject={quote(subject, safe=_URI_SAFE)}&body={quote(body, safe=_URI_SAFE)}"
