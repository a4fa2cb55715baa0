"""Tests for record_dedupe.resolve.merge (field-level smart merge)."""

import pytest

from record_dedupe.models import Contact, Order, Product
from record_dedupe.resolve.merge import (
    more_recent,
    smart_merge,
    smart_merge_contacts,
    smart_merge_orders,
    smart_merge_products,
)


class TestMoreRecent:
    """Test the recency tiebreak."""

    def test_later_updated_wins(self, sparse_contacts):
        primary, other = sparse_contacts
        assert more_recent(primary, other) is other

    def test_tie_goes_to_primary(self):
        a = Contact(id="a", updated_at="2024-01-01T00:00:00Z")
        b = Contact(id="b", updated_at="2024-01-01T00:00:00Z")
        assert more_recent(a, b) is a

    def test_missing_timestamp_is_oldest(self):
        a = Contact(id="a")
        b = Contact(id="b", updated_at="2024-01-01")
        assert more_recent(a, b) is b
        assert more_recent(b, a) is b

    def test_invalid_timestamp_is_oldest(self):
        a = Contact(id="a", updated_at="yesterday")
        b = Contact(id="b", updated_at="2020-01-01")
        assert more_recent(a, b) is b


class TestSmartMergeContacts:
    """Test contact merging."""

    def test_primary_value_wins(self):
        merged = smart_merge_contacts(Contact(id="a", email="x"), Contact(id="b", email="y"))
        assert merged.email == "x"

    def test_blank_primary_takes_other(self):
        merged = smart_merge_contacts(Contact(id="a", email=""), Contact(id="b", email="y"))
        assert merged.email == "y"

    def test_whitespace_is_blank(self):
        merged = smart_merge_contacts(Contact(id="a", email="   "), Contact(id="b", email="y"))
        assert merged.email == "y"

    def test_both_blank_stays_blank(self, sparse_contacts):
        """Blank state on both sides stays blank whichever record is newer."""
        primary, other = sparse_contacts
        primary = primary.model_copy(update={"state": ""})
        assert smart_merge_contacts(primary, other).state == ""
        assert smart_merge_contacts(other, primary).state == ""

    def test_complementary_fields(self, sparse_contacts):
        primary, other = sparse_contacts
        merged = smart_merge_contacts(primary, other)
        assert merged.name == "John Doe"
        assert merged.email == "john@example.com"
        assert merged.phone == "555-1234"
        assert merged.address == "123 Main St"
        assert merged.city == "Los Angeles"
        assert merged.state == "CA"
        assert merged.zip == "90210"
        assert merged.notes == "VIP customer"

    def test_notes_concatenated(self):
        merged = smart_merge_contacts(Contact(id="a", notes="foo"), Contact(id="b", notes="bar"))
        assert merged.notes == "foo\n\nbar"

    def test_same_notes_not_duplicated(self):
        merged = smart_merge_contacts(Contact(id="a", notes="foo"), Contact(id="b", notes="foo"))
        assert merged.notes == "foo"

    def test_notes_both_blank_is_none(self):
        merged = smart_merge_contacts(Contact(id="a", notes=""), Contact(id="b", notes=None))
        assert merged.notes is None

    def test_created_at_uses_earliest(self):
        a = Contact(id="a", created_at="2024-01-05")
        b = Contact(id="b", created_at="2024-01-01")
        assert smart_merge_contacts(a, b).created_at == "2024-01-01"
        assert smart_merge_contacts(b, a).created_at == "2024-01-01"

    def test_created_at_ignores_invalid(self):
        a = Contact(id="a", created_at="garbage")
        b = Contact(id="b", created_at="2024-01-01")
        assert smart_merge_contacts(a, b).created_at == "2024-01-01"
        assert smart_merge_contacts(b, a).created_at == "2024-01-01"

    def test_no_id_or_updated_at(self, sparse_contacts):
        fields = smart_merge_contacts(*sparse_contacts).model_dump()
        assert "id" not in fields
        assert "updated_at" not in fields


class TestSmartMergeProducts:
    """Test product merging."""

    def test_complementary_fields(self, sparse_products):
        primary, other = sparse_products
        merged = smart_merge_products(primary, other)
        assert merged.name == "Solar Panel"
        assert merged.description == "High efficiency solar panel"
        assert merged.image_url == "panel1.jpg"
        assert merged.data_sheet_url == "datasheet.pdf"
        assert merged.category_id == "cat1"
        assert merged.sku == "SP-001"

    def test_zero_price_never_preferred(self, sparse_products):
        primary, other = sparse_products
        assert smart_merge_products(primary, other).price == 299.99
        assert smart_merge_products(other, primary).price == 299.99

    def test_is_active_follows_recency(self, sparse_products):
        """Booleans come from the most recently updated record."""
        primary, other = sparse_products
        assert smart_merge_products(primary, other).is_active is False
        assert smart_merge_products(other, primary).is_active is False


class TestSmartMergeOrders:
    """Test order merging."""

    def test_complementary_fields(self, sparse_orders):
        primary, other = sparse_orders
        merged = smart_merge_orders(primary, other)
        assert merged.contact_id == "contact1"
        assert merged.status == "proposed"
        assert merged.order_date == "2024-01-01"
        assert merged.notes == "Rush order"

    def test_zero_total_never_preferred(self, sparse_orders):
        primary, other = sparse_orders
        assert smart_merge_orders(other, primary).total == 1500.00

    def test_notes_not_concatenated(self):
        """Only contacts concatenate notes; orders keep the primary's."""
        merged = smart_merge_orders(Order(id="a", notes="foo"), Order(id="b", notes="bar"))
        assert merged.notes == "foo"


class TestSmartMergeDispatch:
    """Test type dispatch."""

    def test_dispatches_by_type(self, sparse_orders):
        merged = smart_merge(*sparse_orders)
        assert merged.notes == "Rush order"

    def test_mixed_types_rejected(self):
        with pytest.raises(TypeError):
            smart_merge(Contact(id="a"), Product(id="b"))
