"""Unit tests for full message parsing."""
import pytest
from decimal import Decimal

from order_intake.services.ordering.parser import parse_message


class TestParseMessage:
    """Test parse_message end to end."""

    def test_complete_order(self, order_text):
        """Every field present and totals reconcile."""
        parsed = parse_message(order_text)

        assert parsed.customer_name == "Jane Doe"
        assert parsed.delivery_date == "2026-02-28"
        assert parsed.delivery_time == "14:00"
        assert parsed.address == "12 Oak St"
        assert parsed.phone == "5551234"
        assert [(i.name, i.quantity, i.unit_price, i.line_total) for i in parsed.items] == [
            ("Widget", 2, Decimal("10.00"), Decimal("20.00")),
            ("Gadget", 1, Decimal("5.00"), Decimal("5.00")),
        ]
        assert parsed.stated_total == Decimal("25.00")
        assert parsed.computed_total == Decimal("25.00")
        assert parsed.requires_review is False
        assert parsed.review_reasons == []

    def test_total_mismatch_requires_review(self, order_text):
        parsed = parse_message(order_text.replace("Total - 25.00", "Total - 30.00"))

        assert parsed.computed_total == Decimal("25.00")
        assert parsed.stated_total == Decimal("30.00")
        assert parsed.requires_review is True
        assert parsed.review_reasons == ["total mismatch"]

    def test_missing_contact_requires_review(self, order_text):
        parsed = parse_message(order_text.replace("Contact - 5551234\n", ""))

        assert parsed.phone is None
        assert parsed.requires_review is True
        assert parsed.review_reasons == ["missing phone"]

    def test_no_items_section(self):
        text = (
            "Order Summary - Jane Doe\n"
            "Delivery Date - 2026-02-28\n"
            "Delivery Time - 14:00\n"
            "Contact - 5551234"
        )

        parsed = parse_message(text)

        assert parsed.items == []
        assert parsed.computed_total == Decimal("0.00")
        assert parsed.stated_total is None
        assert parsed.requires_review is False

    def test_missing_address_does_not_require_review(self, order_text):
        parsed = parse_message(order_text.replace("Location - 12 Oak St\n", ""))

        assert parsed.address is None
        assert parsed.requires_review is False

    def test_crlf_and_casing(self):
        text = (
            "order summary -  Ada \r\n"
            "DELIVERY DATE - Friday\r\n"
            "delivery time - noon\r\n"
            "contact - 080\r\n"
            "items:\r\n"
            "1 Puff Puff - 3.333\r\n"
            "1 Chin Chin - 3.333\r\n"
            "total = 6.67\r\n"
        )

        parsed = parse_message(text)

        assert parsed.customer_name == "Ada"
        assert parsed.computed_total == Decimal("6.67")
        assert parsed.requires_review is False

    def test_stated_total_is_rounded(self, order_text):
        parsed = parse_message(order_text.replace("Total - 25.00", "Total - 25.005"))

        assert parsed.stated_total == Decimal("25.01")
        assert parsed.requires_review is False

    def test_garbage_input_degrades_gracefully(self):
        parsed = parse_message("hello\n???\n- - -")

        assert parsed.customer_name is None
        assert parsed.items == []
        assert parsed.computed_total == Decimal("0.00")
        assert parsed.requires_review is True
        assert len(parsed.review_reasons) == 4

    def test_empty_message(self):
        parsed = parse_message("")

        assert parsed.items == []
        assert parsed.requires_review is True

    def test_parsing_is_idempotent(self, order_text):
        first = parse_message(order_text)
        second = parse_message(order_text)

        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_json_dump_uses_numbers(self, order_text):
        data = parse_message(order_text).model_dump(mode="json")

        assert data["computed_total"] == 25.0
        assert data["stated_total"] == 25.0
        assert data["items"][0] == {
            "name": "Widget", "quantity": 2, "unit_price": 10.0, "line_total": 20.0
        }

    def test_very_long_stated_total(self, order_text):
        parsed = parse_message(order_text.replace("Total - 25.00", "Total - " + "9" * 30))

        assert parsed.stated_total == Decimal("9" * 30 + ".00")
        assert parsed.review_reasons == ["total mismatch"]

    def test_very_long_item_price(self, order_text):
        text = order_text.replace("1 Gadget - 5.00", "1 A - " + "9" * 30)

        parsed = parse_message(text)

        assert parsed.computed_total == Decimal("1" + "0" * 28 + "19.00")
        assert parsed.requires_review is True

    def test_overlong_quantity_line_is_skipped(self, order_text):
        text = order_text.replace("1 Gadget - 5.00", "1" * 5000 + " A - 1.00")

        parsed = parse_message(text)

        assert [item.name for item in parsed.items] == ["Widget"]
        assert parsed.computed_total == Decimal("20.00")

    def test_non_ascii_digits_are_not_parsed(self, order_text):
        text = order_text.replace("1 Gadget - 5.00", "٢ Gadget - ١٠").replace(
            "Total - 25.00", "Total - ٢٥"
        )

        parsed = parse_message(text)

        assert [item.name for item in parsed.items] == ["Widget"]
        assert parsed.stated_total is None

    def test_non_text_input_is_rejected(self):
        with pytest.raises(TypeError):
            parse_message(None)
