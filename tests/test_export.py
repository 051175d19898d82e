"""Tests for the plain-text list renderings."""

from urllib.parse import unquote

from hannah.shopping.aggregation.aggregator import AggregatedItem
from hannah.shopping.aggregation.grouping import GroupedList, group_by_category
from hannah.shopping.export import clipboard_text, email_body, mailto_url


def _grouped() -> GroupedList:
    return group_by_category([
        AggregatedItem("rice_cup", "Rice", 1.5, "cup", "Pantry"),
        AggregatedItem("apple_medium", "Apple", 2, "medium", "Produce"),
        AggregatedItem("salmon_fillet", "Salmon", 1, "fillet", "Proteins"),
    ])


def test_clipboard_text():
    assert clipboard_text(_grouped()) == (
        "Shopping List\n\n"
        "Produce:\n"
        "• Apple - 2 mediums\n"
        "\n"
        "Proteins:\n"
        "• Salmon - 1 fillet\n"
        "\n"
        "Pantry:\n"
        "• Rice - 1.5 cups\n"
        "\n"
    )


def test_clipboard_text_empty():
    assert clipboard_text(GroupedList()) == "Shopping List\n\n"


def test_email_body_footer():
    body = email_body(_grouped())
    assert body.startswith("My Shopping List from Hannah.health\n\nProduce:\n")
    assert body.endswith("• Rice - 1.5 cups\n\n\nView your meal plan at: hannah.health")


def test_email_body_without_footer():
    assert email_body(GroupedList(), header="List", footer="") == "List\n\n"


def test_mailto_url_encoding():
    url = mailto_url(_grouped())
    assert url.startswith("mailto:?subject=My%20Shopping%20List%20-%20Hannah.health&body=")
    body = url.split("&body=", 1)[1]
    assert "\n" not in body
    assert " " not in body
    assert "%0A" in body
    assert "%E2%80%A2" in body
    assert unquote(body) == email_body(_grouped())


def test_mailto_url_escapes_reserved_characters():
    grouped = group_by_category([
        AggregatedItem("mac & cheese_box", "Mac & Cheese", 1, "box", "Dairy"),
    ])
    url = mailto_url(grouped, subject="A&B?")
    assert url.startswith("mailto:?subject=A%26B%3F&body=")
    assert url.count("&") == 1


def test_mailto_url_keeps_uri_component_marks():
    """Same escaping as encodeURIComponent: !'()* stay literal."""
    grouped = group_by_category([
        AggregatedItem("chili (dried)_pinch", "Chili (dried)", 1, "pinch", "Other"),
    ])
    url = mailto_url(grouped, subject="Don't forget!*")
    assert url.startswith("mailto:?subject=Don't%20forget!*&body=")
    assert "Chili%20(dried)" in url
