"""
Emisión de tickets de caja.
Lee catálogo y tarjetas, calcula descuentos y guarda el ticket en CSV o JSON.

Uso:
    python main.py 1-4 2-5 discountCard=1111 [--products P] [--cards P] [--output P]
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from catalog import ProductNotFoundError
from loader import load_discount_cards, load_products
from models import Receipt
from pricing import InvalidQuantityError, checkout
from receipt_writer import render_receipt, write_receipt
from settings import Settings, load_settings

logger = logging.getLogger(__name__)

# Canasta y tarjeta que se usan si no se pasa ningún producto
DEFAULT_BASKET = {1: 4, 2: 5}
DEFAULT_CARD_NUMBER = 1111

CARD_PREFIX = "discountCard="
PATH_OPTIONS = {"--products": "products_path", "--cards": "discount_cards_path", "--output": "result_path"}

USAGE = "Uso: python main.py ID-CANTIDAD [ID-CANTIDAD ...] [discountCard=NUMERO] [--products P] [--cards P] [--output P]"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def parse_item(arg: str) -> tuple[int, int]:
    """'3-2' -> (3, 2)."""
    product_id, sep, quantity = arg.partition("-")
    if not sep:
        raise ValueError(f"Producto mal formado: {arg!r} (se espera ID-CANTIDAD)")
    try:
        return int(product_id), int(quantity)
    except ValueError:
        raise ValueError(f"Producto mal formado: {arg!r} (se espera ID-CANTIDAD)") from None


def parse_args(argv: list[str]) -> tuple[dict[int, int], Optional[int], dict[str, str]]:
    """
    Devuelve (canasta, número de tarjeta, rutas). Un id repetido suma sus
    cantidades. Sin productos se usan la canasta y la tarjeta por defecto.
    """
    requested: dict[int, int] = {}
    card_number = None
    paths: dict[str, str] = {}

    args = iter(argv)
    for arg in args:
        if arg in PATH_OPTIONS:
            value = next(args, None)
            if value is None:
                raise ValueError(f"Falta la ruta para {arg}")
            paths[PATH_OPTIONS[arg]] = value
        elif arg.startswith(CARD_PREFIX):
            try:
                card_number = int(arg[len(CARD_PREFIX):])
            except ValueError:
                raise ValueError(f"Número de tarjeta inválido: {arg!r}") from None
        else:
            product_id, quantity = parse_item(arg)
            requested[product_id] = requested.get(product_id, 0) + quantity

    if not requested:
        logger.info("Sin productos en la línea de comandos, se usa la canasta por defecto")
        requested = dict(DEFAULT_BASKET)
        if card_number is None:
            card_number = DEFAULT_CARD_NUMBER
    return requested, card_number, paths


def run_checkout(
    settings: Settings,
    requested: dict[int, int],
    card_number: Optional[int] = None,
) -> Receipt | None:
    """
    Carga datos, calcula y guarda el ticket. Devuelve None si hay error de
    entrada; el detalle queda en el log.
    """
    try:
        catalog = load_products(settings.products_path)
        registry = load_discount_cards(settings.discount_cards_path)
        receipt = checkout(catalog, registry, requested, card_number)
        write_receipt(receipt, settings.result_path)
        return receipt
    except FileNotFoundError as e:
        logger.error("Archivo no encontrado: %s", e)
        return None
    except ProductNotFoundError as e:
        logger.error("Producto inexistente: %s", e)
        return None
    except InvalidQuantityError as e:
        logger.error("Cantidad inválida: %s", e)
        return None
    except ValueError as e:
        logger.error("Error de formato o validación: %s", e)
        return None


def main(argv: list[str] | None = None) -> None:
    """CLI: productos como ID-CANTIDAD y tarjeta opcional."""
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] in ("-h", "--help"):
        print(USAGE)
        sys.exit(0)

    try:
        settings = load_settings()
    except ValidationError as e:
        print(f"Configuración inválida: {e}")
        sys.exit(1)
    setup_logging(settings.log_level)

    try:
        requested, card_number, paths = parse_args(argv)
    except ValueError as e:
        logger.error("%s", e)
        print(USAGE)
        sys.exit(1)

    if paths:
        settings = settings.model_copy(update={key: Path(value) for key, value in paths.items()})

    receipt = run_checkout(settings, requested, card_number)
    if receipt is None:
        sys.exit(1)

    print(render_receipt(receipt))


if __name__ == "__main__":
    main()
