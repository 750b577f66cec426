from decimal import Decimal

import pytest

from catalog import DEFAULT_DISCOUNT_RATE, Catalog, DiscountCardRegistry, ProductNotFoundError
from models import DiscountCard, Product


def test_lookup_returns_product(catalog, widget):
    assert catalog.lookup(1) is widget
    assert 1 in catalog
    assert 99 not in catalog
    assert len(catalog) == 2
    assert [p.id for p in catalog] == [1, 2]


def test_lookup_unknown_product(catalog):
    with pytest.raises(ProductNotFoundError) as excinfo:
        catalog.lookup(99)
    assert excinfo.value.product_id == 99
    assert "99" in str(excinfo.value)


def test_catalog_rejects_duplicate_ids(widget):
    other = Product(id=1, description="Other", price=Decimal("1.00"))
    with pytest.raises(ValueError, match="duplicado"):
        Catalog([widget, other])


def test_registered_card(registry):
    card = registry.lookup(1111)
    assert card.number == 1111
    assert card.discount_rate == Decimal("3.00")
    assert registry.is_registered(1111)


def test_unknown_card_gets_default_rate(registry):
    card = registry.lookup(9999)
    assert card.number == 9999
    assert card.discount_rate == DEFAULT_DISCOUNT_RATE == Decimal("2.00")


def test_default_card_is_not_stored(registry):
    registry.lookup(9999)
    assert not registry.is_registered(9999)
    assert len(registry) == 2


def test_registry_rejects_duplicate_numbers():
    with pytest.raises(ValueError):
        DiscountCardRegistry([
            DiscountCard(number=1, discount_rate=Decimal("1")),
            DiscountCard(number=1, discount_rate=Decimal("2")),
        ])
