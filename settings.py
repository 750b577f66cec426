"""
Configuración desde variables de entorno (.env incluido).
"""

import os
from pathlib import Path

import dotenv
from pydantic import BaseModel, Field, field_validator

# Cargar .env al inicio para que las variables CHECK_* estén disponibles
dotenv.load_dotenv()

DEFAULT_PRODUCTS_PATH = "data/products.csv"
DEFAULT_DISCOUNT_CARDS_PATH = "data/discountCards.csv"
DEFAULT_RESULT_PATH = "receipt.csv"

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseModel):
    products_path: Path = Field(default=Path(DEFAULT_PRODUCTS_PATH), description="CSV de productos")
    discount_cards_path: Path = Field(default=Path(DEFAULT_DISCOUNT_CARDS_PATH), description="CSV de tarjetas")
    result_path: Path = Field(default=Path(DEFAULT_RESULT_PATH), description="Archivo del ticket (.csv o .json)")
    log_level: str = Field(default="INFO", description="Nivel de logging")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"Nivel de logging desconocido: {value!r}")
        return value


def load_settings() -> Settings:
    """Lee CHECK_* del entorno; lo que falte toma el valor por defecto."""
    return Settings(
        products_path=os.getenv("CHECK_PRODUCTS_PATH", DEFAULT_PRODUCTS_PATH),
        discount_cards_path=os.getenv("CHECK_DISCOUNT_CARDS_PATH", DEFAULT_DISCOUNT_CARDS_PATH),
        result_path=os.getenv("CHECK_RESULT_PATH", DEFAULT_RESULT_PATH),
        log_level=os.getenv("CHECK_LOG_LEVEL", "INFO"),
    )
