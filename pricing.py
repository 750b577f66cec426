"""
Resolución de la canasta y cálculo de descuentos del ticket.

Reglas por línea (excluyentes, en este orden):
1. Mayorista: producto con wholesale_product y cantidad >= 5 -> 10% del subtotal.
2. Tarjeta: si no aplica mayorista y hay tarjeta -> rate% del subtotal.
3. Sin descuento.

Los importes se redondean a escala 2 (HALF_UP) al fijar cada valor de línea;
los totales se acumulan con los valores ya redondeados para que el ticket
cuadre al centavo.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from catalog import Catalog, DiscountCardRegistry
from models import (
    DiscountCard,
    DiscountKind,
    LineResult,
    Product,
    Receipt,
    ReceiptTotals,
    round_money,
)

logger = logging.getLogger(__name__)

WHOLESALE_MIN_QUANTITY = 5
WHOLESALE_DISCOUNT_RATE = Decimal("10.00")

ZERO = Decimal("0.00")
HUNDRED = Decimal(100)


class InvalidQuantityError(ValueError):
    """Cantidad pedida cero o negativa."""

    def __init__(self, product_id: int, quantity: int):
        super().__init__(f"Invalid quantity {quantity} for product with ID {product_id}.")
        self.product_id = product_id
        self.quantity = quantity


def _check_quantity(product_id: int, quantity: int) -> None:
    if quantity <= 0:
        raise InvalidQuantityError(product_id, quantity)


def resolve_basket(requested: Mapping[int, int], catalog: Catalog) -> list[tuple[Product, int]]:
    """
    Convierte {product_id: cantidad} en líneas (Product, cantidad).
    Todo o nada: si algún id no existe o la cantidad no es positiva, no se
    devuelve ninguna línea. Respeta el orden de inserción del pedido.
    """
    lines = []
    for product_id, quantity in requested.items():
        product = catalog.lookup(product_id)
        _check_quantity(product_id, quantity)
        lines.append((product, quantity))

    logger.debug("Canasta resuelta: %d producto(s)", len(lines))
    return lines


class PricingEngine:
    """Calcula líneas y totales. No modifica catálogo, productos ni tarjeta."""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def _aggregate(self, lines: Iterable[tuple[Product, int]]) -> dict[int, int]:
        # Un producto repetido se cobra como una sola línea (primer orden de aparición)
        quantities: dict[int, int] = {}
        for product, quantity in lines:
            _check_quantity(product.id, quantity)
            quantities[product.id] = quantities.get(product.id, 0) + quantity
        return quantities

    def price_line(self, product: Product, quantity: int, card: Optional[DiscountCard]) -> LineResult:
        subtotal = product.price * quantity

        if product.wholesale_product and quantity >= WHOLESALE_MIN_QUANTITY:
            kind = DiscountKind.WHOLESALE
            rate = WHOLESALE_DISCOUNT_RATE
        elif card is not None:
            kind = DiscountKind.CARD
            rate = card.discount_rate
        else:
            kind = DiscountKind.NONE
            rate = ZERO

        discount = round_money(subtotal * rate / HUNDRED)
        subtotal = round_money(subtotal)
        return LineResult(
            product_id=product.id,
            description=product.description,
            quantity=quantity,
            unit_price=product.price,
            subtotal=subtotal,
            discount=discount,
            total=subtotal - discount,
            discount_kind=kind,
            discount_rate=rate,
        )

    def price(
        self,
        lines: Iterable[tuple[Product, int]],
        card: Optional[DiscountCard] = None,
    ) -> tuple[list[LineResult], ReceiptTotals]:
        quantities = self._aggregate(lines)

        # Se valida todo antes de calcular: sin tickets parciales
        products = [self.catalog.lookup(product_id) for product_id in quantities]

        results = []
        total_without_discount = ZERO
        total_discount = ZERO
        for product in products:
            result = self.price_line(product, quantities[product.id], card)
            results.append(result)
            total_without_discount += result.subtotal
            total_discount += result.discount

        totals = ReceiptTotals(
            total_without_discount=total_without_discount,
            total_discount=total_discount,
            total_with_discount=total_without_discount - total_discount,
        )
        return results, totals


def checkout(
    catalog: Catalog,
    registry: DiscountCardRegistry,
    requested: Mapping[int, int],
    card_number: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Receipt:
    """
    Punto de entrada del cálculo: resuelve la canasta, busca la tarjeta y
    calcula el ticket una sola vez. El resultado alimenta archivo y consola.
    """
    lines = resolve_basket(requested, catalog)
    card = registry.lookup(card_number) if card_number is not None else None
    results, totals = PricingEngine(catalog).price(lines, card)

    logger.info(
        "Ticket calculado: %d línea(s), total %s, descuento %s",
        len(results),
        totals.total_with_discount,
        totals.total_discount,
    )
    return Receipt(
        created_at=now or datetime.now(),
        discount_card=card,
        lines=results,
        totals=totals,
    )
