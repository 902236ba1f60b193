"""
Router principal da API.
Agrupa scraping (Radar, Planejadora, PNBox) e arquivos estáticos.
"""
from fastapi import APIRouter
from app.api import radar, planning, assets

router = APIRouter()


@router.get("")
async def api_root():
    """Lista os endpoints disponíveis."""
    return {
        "status": "ok",
        "endpoints": {
            "radar": "POST /api/radar",
            "planejadora": "POST /api/planejadora",
            "pnbox": "POST /api/pnbox",
            "planilha_preview": "GET /api/planilhas/{arquivo}/preview",
            "planilha_abas": "GET /api/planilhas/{arquivo}/abas",
            "planilha_range": "GET /api/planilhas/{arquivo}/range",
            "financeiro": "GET /api/financeiro",
            "pdf_text": "GET /api/pdf/{arquivo}/text",
            "pdf_links": "GET /api/pdf/{arquivo}/links",
            "arquivos": "GET /files/{arquivo}",
        },
        "docs": "/docs"
    }


router.include_router(radar.router, tags=["radar"])
router.include_router(planning.router, tags=["planejamento"])
router.include_router(assets.router, tags=["arquivos"])

__all__ = ["router"]
