"""
Salida del ticket: archivo CSV (';'), JSON y tabla para consola.
Los importes se escriben siempre con dos decimales.
"""

import csv
import logging
from decimal import Decimal
from pathlib import Path

from models import Receipt, round_money

logger = logging.getLogger(__name__)

CSV_DELIMITER = ";"
DATE_FORMAT = "%d.%m.%Y"
TIME_FORMAT = "%H:%M:%S"
LINE_HEADER = ["QTY", "DESCRIPTION", "PRICE", "DISCOUNT", "TOTAL"]


def format_money(value: Decimal) -> str:
    return f"{round_money(value):f}"


def receipt_rows(receipt: Receipt) -> list[list[str]]:
    """Filas del ticket en el orden del archivo; [] es una fila vacía."""
    rows = [
        ["Date", receipt.created_at.strftime(DATE_FORMAT)],
        ["Time", receipt.created_at.strftime(TIME_FORMAT)],
        [],
        list(LINE_HEADER),
    ]
    for line in receipt.lines:
        rows.append([
            str(line.quantity),
            line.description,
            format_money(line.unit_price),
            format_money(line.discount),
            format_money(line.total),
        ])

    rows.append([])
    if receipt.discount_card is not None:
        rows.append(["DISCOUNT CARD", str(receipt.discount_card.number)])
        rows.append(["DISCOUNT PERCENTAGE", f"{format_money(receipt.discount_card.discount_rate)}%"])
        rows.append([])

    totals = receipt.totals
    rows.append(["TOTAL PRICE", format_money(totals.total_without_discount)])
    rows.append(["TOTAL DISCOUNT", format_money(totals.total_discount)])
    rows.append(["TOTAL WITH DISCOUNT", format_money(totals.total_with_discount)])
    return rows


def write_receipt_csv(receipt: Receipt, result_path: str | Path) -> Path:
    path = Path(result_path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, delimiter=CSV_DELIMITER)
        writer.writerows(receipt_rows(receipt))

    logger.info("Ticket guardado en %s", path)
    return path


def write_receipt_json(receipt: Receipt, result_path: str | Path) -> Path:
    path = Path(result_path)
    path.write_text(receipt.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Ticket guardado en %s", path)
    return path


def write_receipt(receipt: Receipt, result_path: str | Path) -> Path:
    """Elige el formato según la extensión del archivo de salida."""
    if Path(result_path).suffix.lower() == ".json":
        return write_receipt_json(receipt, result_path)
    return write_receipt_csv(receipt, result_path)


def render_receipt(receipt: Receipt) -> str:
    """Tabla de texto para mostrar el ticket por consola."""
    lines = [
        f"Date: {receipt.created_at.strftime(DATE_FORMAT)}",
        f"Time: {receipt.created_at.strftime(TIME_FORMAT)}",
        "",
        f"{'QTY':<5} {'DESCRIPTION':<30} {'PRICE':<10} {'DISCOUNT':<10} {'TOTAL':<10}",
    ]
    for line in receipt.lines:
        lines.append(
            f"{line.quantity:<5d} {line.description:<30} "
            f"{format_money(line.unit_price):<10} {format_money(line.discount):<10} "
            f"{format_money(line.total):<10}"
        )

    lines.append("")
    if receipt.discount_card is not None:
        lines.append(f"DISCOUNT CARD: {receipt.discount_card.number}")
        lines.append(f"DISCOUNT PERCENTAGE: {format_money(receipt.discount_card.discount_rate)}%")
        lines.append("")

    totals = receipt.totals
    lines.append(f"TOTAL PRICE: {format_money(totals.total_without_discount)}")
    lines.append(f"TOTAL DISCOUNT: {format_money(totals.total_discount)}")
    lines.append(f"TOTAL WITH DISCOUNT: {format_money(totals.total_with_discount)}")
    return "\n".join(lines)
