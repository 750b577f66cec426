from datetime import datetime
from decimal import Decimal

import pytest

from catalog import Catalog, DiscountCardRegistry
from models import DiscountCard, Product


@pytest.fixture
def widget() -> Product:
    return Product(id=1, description="Widget", price=Decimal("10.00"), quantity_in_stock=3, wholesale_product=True)


@pytest.fixture
def gadget() -> Product:
    return Product(id=2, description="Gadget", price=Decimal("3.33"), quantity_in_stock=50, wholesale_product=False)


@pytest.fixture
def catalog(widget, gadget) -> Catalog:
    return Catalog([widget, gadget])


@pytest.fixture
def registry() -> DiscountCardRegistry:
    return DiscountCardRegistry([
        DiscountCard(number=1111, discount_rate=Decimal("3")),
        DiscountCard(number=2222, discount_rate=Decimal("2.00")),
    ])


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 18, 14, 30, 5)


@pytest.fixture
def data_files(tmp_path):
    products = tmp_path / "products.csv"
    products.write_text(
        "id;description;price;quantity_in_stock;wholesale_product\n"
        "1; Widget ;10.00;3;true\n"
        "2;Gadget;3.33;50;false\n",
        encoding="utf-8",
    )
    cards = tmp_path / "discountCards.csv"
    cards.write_text("number;amount\n1111;3\n2222;2\n", encoding="utf-8")
    return products, cards
