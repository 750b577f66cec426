"""
Catálogo de productos y registro de tarjetas de descuento.
Ambos son de solo lectura una vez construidos.
"""

import logging
from decimal import Decimal
from typing import Iterable, Iterator

from models import DiscountCard, Product

logger = logging.getLogger(__name__)

# Porcentaje para tarjetas no registradas (cliente sin alta)
DEFAULT_DISCOUNT_RATE = Decimal("2.00")


class ProductNotFoundError(LookupError):
    """El producto pedido no existe en el catálogo."""

    def __init__(self, product_id: int):
        super().__init__(f"Product with ID {product_id} not found.")
        self.product_id = product_id


class Catalog:
    def __init__(self, products: Iterable[Product]):
        self._products: dict[int, Product] = {}
        for product in products:
            if product.id in self._products:
                raise ValueError(f"Producto duplicado en el catálogo: id={product.id}")
            self._products[product.id] = product

    def lookup(self, product_id: int) -> Product:
        """Devuelve el producto o lanza ProductNotFoundError."""
        try:
            return self._products[product_id]
        except KeyError:
            raise ProductNotFoundError(product_id) from None

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())


class DiscountCardRegistry:
    def __init__(self, cards: Iterable[DiscountCard]):
        self._cards: dict[int, DiscountCard] = {}
        for card in cards:
            if card.number in self._cards:
                raise ValueError(f"Tarjeta duplicada en el registro: number={card.number}")
            self._cards[card.number] = card

    def is_registered(self, number: int) -> bool:
        return number in self._cards

    def lookup(self, number: int) -> DiscountCard:
        """
        Nunca falla: si la tarjeta no está registrada devuelve una nueva con
        el descuento por defecto. La tarjeta sintetizada no se guarda.
        """
        card = self._cards.get(number)
        if card is None:
            logger.info(
                "Tarjeta %d no registrada, se aplica descuento por defecto de %s%%",
                number,
                DEFAULT_DISCOUNT_RATE,
            )
            return DiscountCard(number=number, discount_rate=DEFAULT_DISCOUNT_RATE)
        return card

    def __len__(self) -> int:
        return len(self._cards)
