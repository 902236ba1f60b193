"""
Endpoints das ferramentas de planejamento (Planejadora e PNBox).
"""
import logging
from fastapi import APIRouter
from app.schemas.planning import PlanejadoraQuery, PlanejadoraResult, PNBoxQuery, PNBoxResult
from app.services.planning import scrape_planejadora, scrape_pnbox

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/planejadora", response_model=PlanejadoraResult)
async def planejadora(request: PlanejadoraQuery) -> PlanejadoraResult:
    """Abre a etapa pedida na Planejadora e extrai os blocos de conteúdo."""
    return await scrape_planejadora(request)


@router.post("/pnbox", response_model=PNBoxResult)
async def pnbox(request: PNBoxQuery) -> PNBoxResult:
    """Abre a etapa pedida no PNBox e extrai as seções do plano de negócio."""
    return await scrape_pnbox(request)
