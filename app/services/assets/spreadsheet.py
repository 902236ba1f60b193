"""
Leitura de planilhas (xlsx) via openpyxl: nomes das abas, grade de células,
prévia e recorte por intervalo A1.
"""

import re
import logging
from contextlib import contextmanager
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from openpyxl import load_workbook

from app.core.errors import InvalidRangeError, SheetNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_ROWS = 20

_CELL_RE = re.compile(r"^\s*\$?([A-Za-z]{1,3})\$?([1-9][0-9]*)\s*$")


@contextmanager
def open_workbook(path: Path):
    workbook = load_workbook(filename=str(path), read_only=True, data_only=True)
    try:
        yield workbook
    finally:
        workbook.close()


def _json_value(value: Any) -> Any:
    """Converte valores de célula para tipos serializáveis em JSON."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def _rows(worksheet, limit: Optional[int] = None, **bounds) -> List[List[Any]]:
    rows = []
    for row in worksheet.iter_rows(values_only=True, **bounds):
        if limit is not None and len(rows) >= limit:
            break
        rows.append([_json_value(v) for v in row])
    return rows


def column_to_index(letters: str) -> int:
    """'A' -> 0, 'Z' -> 25, 'AA' -> 26."""
    index = 0
    for char in letters.upper():
        index = index * 26 + (ord(char) - ord('A') + 1)
    return index - 1


def cell_to_index(ref: str) -> Tuple[int, int]:
    """
    Converte uma referência A1 em índices base zero (linha, coluna).

    Raises:
        InvalidRangeError: referência fora do formato letras+número
    """
    match = _CELL_RE.match(ref or "")
    if not match:
        raise InvalidRangeError(ref)
    letters, number = match.groups()
    return int(number) - 1, column_to_index(letters)


def parse_range(value: str) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """
    'A1:D10' -> ((0, 0), (9, 3)). Uma célula só ('B3') vale como intervalo 1x1.
    Intervalos invertidos são normalizados.
    """
    if not value or value.count(":") > 1:
        raise InvalidRangeError(value)
    start_ref, sep, end_ref = value.partition(":")
    start = cell_to_index(start_ref)
    end = cell_to_index(end_ref) if sep else start
    top, bottom = sorted((start[0], end[0]))
    left, right = sorted((start[1], end[1]))
    return (top, left), (bottom, right)


def list_sheets(path: Path) -> List[str]:
    with open_workbook(path) as workbook:
        return list(workbook.sheetnames)


def read_grid(path: Path, sheet: str, max_rows: Optional[int] = None) -> List[List[Any]]:
    """Grade de células (linha a linha) de uma aba."""
    with open_workbook(path) as workbook:
        if sheet not in workbook.sheetnames:
            raise SheetNotFoundError(sheet)
        return _rows(workbook[sheet], limit=max_rows)


def preview(path: Path, sheet: Optional[str] = None, max_rows: int = DEFAULT_PREVIEW_ROWS) -> Dict[str, Any]:
    """
    Prévia de uma aba quando ela existe; caso contrário (aba omitida ou
    inexistente), prévia de todas as abas.
    """
    with open_workbook(path) as workbook:
        names = list(workbook.sheetnames)
        if sheet and sheet in names:
            return {
                "arquivo": path.name,
                "aba": sheet,
                "linhas": _rows(workbook[sheet], limit=max_rows),
            }

        if sheet:
            logger.info(f"Aba '{sheet}' não existe em {path.name}, retornando prévia de todas")
        return {
            "arquivo": path.name,
            "abas": [
                {"nome": name, "linhas": _rows(workbook[name], limit=max_rows)}
                for name in names
            ],
        }


def read_range(path: Path, sheet: Optional[str], cell_range: str) -> Dict[str, Any]:
    """
    Recorte retangular de uma aba (a primeira, se omitida).

    Raises:
        InvalidRangeError: intervalo malformado
        SheetNotFoundError: aba inexistente
    """
    (top, left), (bottom, right) = parse_range(cell_range)
    with open_workbook(path) as workbook:
        name = sheet or workbook.sheetnames[0]
        if name not in workbook.sheetnames:
            raise SheetNotFoundError(name)
        cells = _rows(
            workbook[name],
            min_row=top + 1,
            max_row=bottom + 1,
            min_col=left + 1,
            max_col=right + 1,
        )
    return {
        "arquivo": path.name,
        "aba": name,
        "intervalo": cell_range.strip().upper(),
        "celulas": cells,
    }
