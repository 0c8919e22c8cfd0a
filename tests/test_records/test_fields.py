"""Tests for field accessors, coercion and schemas."""

import pytest
from datetime import date, datetime


class TestAccessors:
    """Tests for accessor builders."""

    def test_attr_on_objects_and_mappings(self):
        from src.records.entities import WorkOrder
        from src.records.fields import attr

        get_status = attr("status")
        assert get_status(WorkOrder(id="1", status="pending")) == "pending"
        assert get_status({"status": "completed"}) == "completed"

    def test_attr_missing_link_is_none(self):
        from src.records.fields import attr

        get_city = attr("customer", "address", "city")
        assert get_city({"customer": {"address": {"city": "Bend"}}}) == "Bend"
        assert get_city({"customer": None}) is None
        assert get_city({}) is None
        assert get_city(object()) is None

    def test_joined(self):
        from src.records.fields import attr, joined

        name = joined(attr("first"), attr("last"))
        assert name({"first": "Dana", "last": "Whitfield"}) == "Dana Whitfield"
        assert name({"first": "Dana", "last": ""}) == "Dana"
        assert name({}) is None

    def test_product(self):
        from src.records.fields import attr, product

        value = product(attr("price"), attr("qty"))
        assert value({"price": "2.5", "qty": 4}) == 10.0
        assert value({"price": 2.5}) == 0.0


class TestCoercion:
    """Tests for value coercion."""

    @pytest.mark.parametrize("raw,expected", [
        (None, 0.0),
        (True, 0.0),
        (3, 3.0),
        ("4.5", 4.5),
        (" 7 ", 7.0),
        ("n/a", 0.0),
        (float("nan"), 0.0),
        ([1], 0.0),
    ])
    def test_coerce_number(self, raw, expected):
        from src.records.fields import coerce_number

        assert coerce_number(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        (None, None),
        (date(2024, 1, 5), date(2024, 1, 5)),
        (datetime(2024, 1, 5, 14, 30), date(2024, 1, 5)),
        ("2024-01-05", date(2024, 1, 5)),
        ("2024-01-05T14:30:00+00:00", date(2024, 1, 5)),
        ("05/01/2024", None),
        (float("nan"), None),
        (20240105, None),
    ])
    def test_coerce_date(self, raw, expected):
        from src.records.fields import coerce_date

        assert coerce_date(raw) == expected

    def test_coerce_text(self):
        from src.records.fields import coerce_text

        assert coerce_text(None) is None
        assert coerce_text(42) == "42"

    def test_humanize_field_name(self):
        from src.records.fields import humanize_field_name

        assert humanize_field_name("gallons_delivered") == "Gallons Delivered"


class TestRecordSchema:
    """Tests for schema lookups."""

    def test_field_lookup(self):
        from src.records.fields import FieldKind
        from src.records.schemas import WORK_ORDER_SCHEMA

        assert WORK_ORDER_SCHEMA.field("status").kind is FieldKind.CATEGORY
        assert WORK_ORDER_SCHEMA.has_field("total_amount", FieldKind.NUMBER)
        assert not WORK_ORDER_SCHEMA.has_field("total_amount", FieldKind.DATE)

    def test_unknown_field(self):
        from src.exceptions import UnknownFieldError
        from src.records.schemas import WORK_ORDER_SCHEMA

        with pytest.raises(UnknownFieldError) as exc_info:
            WORK_ORDER_SCHEMA.field("colour")
        assert str(exc_info.value) == "'colour' is not a field of work_orders"

    def test_wrong_kind(self):
        from src.exceptions import UnknownFieldError
        from src.records.fields import FieldKind
        from src.records.schemas import WORK_ORDER_SCHEMA

        with pytest.raises(UnknownFieldError, match="not a date field"):
            WORK_ORDER_SCHEMA.field("status", FieldKind.DATE)

    def test_invalid_schema_definition(self):
        from src.exceptions import UnknownFieldError
        from src.records.fields import RecordSchema, text

        with pytest.raises(UnknownFieldError):
            RecordSchema(entity="notes", fields=(text("body"),), search_fields=("title",))
        with pytest.raises(UnknownFieldError):
            RecordSchema(entity="notes", fields=(text("body"),), date_field="body")

    def test_names_by_kind(self):
        from src.records.fields import FieldKind
        from src.records.schemas import PAYMENT_SCHEMA

        assert PAYMENT_SCHEMA.names(FieldKind.CATEGORY) == ("method", "status")
        assert PAYMENT_SCHEMA.names(FieldKind.NUMBER) == ("amount",)

    def test_labels(self):
        from src.records.schemas import DELIVERY_SCHEMA

        labels = DELIVERY_SCHEMA.labels(["gallons_delivered", "payment_method"])
        assert labels == {"gallons_delivered": "Gallons", "payment_method": "Payment Method"}

    def test_computed_field(self):
        from src.records.entities import InventoryItem
        from src.records.schemas import INVENTORY_SCHEMA

        item = InventoryItem(id="1", quantity=3, unit_price=12.5)
        assert INVENTORY_SCHEMA.number(item, "stock_value") == 37.5
        assert item.total_value == 37.5

    def test_get_schema(self):
        from src.exceptions import UnknownEntityError
        from src.records.schemas import DELIVERY_SCHEMA, get_schema

        assert get_schema("deliveries") is DELIVERY_SCHEMA
        with pytest.raises(UnknownEntityError, match="spaceships"):
            get_schema("spaceships")
