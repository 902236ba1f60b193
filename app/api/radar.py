"""
Endpoint Radar - scraping de oportunidades, demografia e concorrência.
"""
import logging
import time
from fastapi import APIRouter
from app.schemas.radar import RadarQuery, RadarResult
from app.services.radar import scrape_radar

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/radar", response_model=RadarResult)
async def radar(request: RadarQuery) -> RadarResult:
    """
    Abre o Radar num navegador isolado, aplica os filtros e extrai os resultados.

    Fluxo:
    1. Validação do corpo (falha -> 400, nenhuma sessão é criada)
    2. Navegação + extração com até 2 novas tentativas
    3. Falha após as tentativas -> 400 com a mensagem do último erro

    Returns:
        {origem, filtros, resultados|paineis|empresas}
    """
    start_time = time.perf_counter()
    result = await scrape_radar(request)
    logger.info(
        f"✅ /api/radar tipo={request.tipo} em {(time.perf_counter() - start_time) * 1000:.1f}ms"
    )
    return result
