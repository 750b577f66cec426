"""
Modelos Pydantic para productos, tarjetas de descuento y tickets de caja.
Todos los valores monetarios son Decimal con escala 2 (redondeo HALF_UP).
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MONEY_QUANTUM = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Lleva un importe a escala 2 con redondeo HALF_UP."""
    return Decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


class Product(BaseModel):
    """Producto del catálogo. Inmutable una vez cargado."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., gt=0, description="Identificador único del producto")
    description: str = Field(..., min_length=1, description="Descripción del producto")
    price: Decimal = Field(..., ge=0, description="Precio unitario")
    quantity_in_stock: int = Field(default=0, ge=0, description="Stock disponible (informativo)")
    wholesale_product: bool = Field(default=False, description="Admite descuento mayorista")

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("La descripción del producto está vacía")
        return value

    @field_validator("price")
    @classmethod
    def _price_scale(cls, value: Decimal) -> Decimal:
        return round_money(value)


class DiscountCard(BaseModel):
    """Tarjeta de descuento: número y porcentaje (5.00 significa 5%)."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., description="Número de tarjeta")
    discount_rate: Decimal = Field(..., description="Porcentaje de descuento")

    @field_validator("discount_rate")
    @classmethod
    def _rate_scale(cls, value: Decimal) -> Decimal:
        return round_money(value)


class DiscountKind(str, Enum):
    NONE = "none"
    WHOLESALE = "wholesale"
    CARD = "card"


class LineResult(BaseModel):
    """Línea del ticket ya calculada (una por producto)."""

    model_config = ConfigDict(frozen=True)

    product_id: int
    description: str
    quantity: int = Field(..., gt=0)
    unit_price: Decimal
    subtotal: Decimal = Field(..., description="unit_price * quantity, sin descuento")
    discount: Decimal
    total: Decimal = Field(..., description="subtotal - discount")
    discount_kind: DiscountKind = DiscountKind.NONE
    discount_rate: Decimal = Field(default=Decimal("0.00"), description="Porcentaje aplicado")

    @property
    def discount_info(self) -> str:
        """Texto corto para mostrar el descuento aplicado."""
        if self.discount_kind is DiscountKind.WHOLESALE:
            return f"{self.discount_rate.normalize():f}% wholesale"
        if self.discount_kind is DiscountKind.CARD:
            return f"{self.discount_rate}% card discount"
        return ""


class ReceiptTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_without_discount: Decimal
    total_discount: Decimal
    total_with_discount: Decimal

    @model_validator(mode="after")
    def _check_balance(self) -> "ReceiptTotals":
        # Los totales siempre cuadran al centavo
        if self.total_with_discount != self.total_without_discount - self.total_discount:
            raise ValueError(
                f"Totales inconsistentes: {self.total_without_discount} - "
                f"{self.total_discount} != {self.total_with_discount}"
            )
        return self


class Receipt(BaseModel):
    """Ticket completo listo para escribir o mostrar."""

    model_config = ConfigDict(frozen=True)

    created_at: datetime = Field(..., description="Fecha y hora de emisión")
    discount_card: Optional[DiscountCard] = Field(None, description="Tarjeta aplicada, si la hubo")
    lines: list[LineResult] = Field(default_factory=list, description="Líneas del ticket")
    totals: ReceiptTotals
