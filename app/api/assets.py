"""
Endpoints de planilhas e PDFs servidos a partir do diretório de assets.

Funções síncronas: o FastAPI executa em threadpool, já que openpyxl e
pdfplumber bloqueiam.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Query
from app.core.config import settings
from app.services.assets import resolve_asset
from app.services.assets import pdf_reader, spreadsheet

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/planilhas/{arquivo:path}/preview")
def sheet_preview(
    arquivo: str,
    sheet: Optional[str] = Query(None, description="Aba a visualizar; inexistente -> todas"),
    max_rows: int = Query(spreadsheet.DEFAULT_PREVIEW_ROWS, ge=1, le=500),
):
    path = resolve_asset(arquivo)
    return spreadsheet.preview(path, sheet=sheet, max_rows=max_rows)


@router.get("/planilhas/{arquivo:path}/abas")
def sheet_names(arquivo: str):
    path = resolve_asset(arquivo)
    return {"arquivo": path.name, "abas": spreadsheet.list_sheets(path)}


@router.get("/planilhas/{arquivo:path}/range")
def sheet_range(
    arquivo: str,
    range: str = Query(..., description="Intervalo A1, ex.: B2:F20"),
    sheet: Optional[str] = Query(None),
):
    path = resolve_asset(arquivo)
    return spreadsheet.read_range(path, sheet, range)


@router.get("/financeiro")
def finance_range(
    range: str = Query(..., description="Intervalo A1, ex.: B2:F20"),
    sheet: Optional[str] = Query(None),
):
    """Recorte da planilha financeira configurada (FINANCE_WORKBOOK)."""
    path = resolve_asset(settings.FINANCE_WORKBOOK)
    return spreadsheet.read_range(path, sheet, range)


@router.get("/pdf/{arquivo:path}/text")
def pdf_text(arquivo: str):
    path = resolve_asset(arquivo)
    return pdf_reader.extract_text(path)


@router.get("/pdf/{arquivo:path}/links")
def pdf_links(
    arquivo: str,
    keywords: Optional[str] = Query(None, description="Palavras-chave separadas por vírgula"),
):
    path = resolve_asset(arquivo)
    terms = keywords.split(",") if keywords else pdf_reader.DEFAULT_KEYWORDS
    return pdf_reader.extract_links_report(path, terms)
