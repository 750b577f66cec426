"""
Carga de productos y tarjetas de descuento desde archivos CSV separados por ';'.
Cada fila se valida con los modelos Pydantic antes de armar catálogo y registro.
"""

import logging
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from catalog import Catalog, DiscountCardRegistry
from models import DiscountCard, Product

logger = logging.getLogger(__name__)

CSV_DELIMITER = ";"

PRODUCT_COLUMNS = ["id", "description", "price", "quantity_in_stock", "wholesale_product"]
# En el archivo de tarjetas el porcentaje viene en la columna "amount"
DISCOUNT_CARD_COLUMNS = {"number": "number", "amount": "discount_rate"}


def read_table(csv_path: str | Path, required_columns: list[str]) -> pd.DataFrame:
    """Lee un CSV con encabezado, todo como texto y sin espacios sobrantes."""
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"No existe el archivo: {path}")

    df = pd.read_csv(
        path,
        sep=CSV_DELIMITER,
        dtype=str,
        keep_default_na=False,
        encoding="utf-8",
    )
    df.columns = [str(column).strip() for column in df.columns]
    for column in df.columns:
        df[column] = df[column].str.strip()

    missing = [column for column in required_columns if column not in df.columns]
    if missing:
        raise ValueError(f"Faltan columnas en {path.name}: {', '.join(missing)}")
    return df


def load_products(csv_path: str | Path) -> Catalog:
    df = read_table(csv_path, PRODUCT_COLUMNS)

    products = []
    # Fila 1 es el encabezado
    for row_number, row in enumerate(df[PRODUCT_COLUMNS].to_dict(orient="records"), start=2):
        try:
            products.append(Product.model_validate(row))
        except ValidationError as e:
            raise ValueError(f"Producto inválido en {Path(csv_path).name}, fila {row_number}: {e}") from e

    catalog = Catalog(products)
    logger.info("Catálogo cargado: %d producto(s) desde %s", len(catalog), csv_path)
    return catalog


def load_discount_cards(csv_path: str | Path) -> DiscountCardRegistry:
    df = read_table(csv_path, list(DISCOUNT_CARD_COLUMNS))
    df = df[list(DISCOUNT_CARD_COLUMNS)].rename(columns=DISCOUNT_CARD_COLUMNS)

    cards = []
    for row_number, row in enumerate(df.to_dict(orient="records"), start=2):
        try:
            cards.append(DiscountCard.model_validate(row))
        except ValidationError as e:
            raise ValueError(f"Tarjeta inválida en {Path(csv_path).name}, fila {row_number}: {e}") from e

    registry = DiscountCardRegistry(cards)
    logger.info("Tarjetas de descuento cargadas: %d desde %s", len(registry), csv_path)
    return registry
