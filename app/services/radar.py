"""
Scraping do Radar: oportunidades, dados demográficos e concorrência.

Fluxo por intenção:
1. Abre a origem e espera a rede assentar
2. Clica no menu da intenção (best-effort)
3. Preenche UF/município e filtros opcionais (best-effort)
4. Clica em buscar e espera
5. Extrai tabela (prioridade) ou cards/seções
"""

import logging
from typing import Optional

from app.core.config import settings
from app.core.errors import ScrapeError
from app.schemas.radar import (
    CompetitionFilters,
    CompetitionResult,
    DemographicsFilters,
    DemographicsResult,
    OpportunitiesFilters,
    OpportunitiesResult,
    RadarQuery,
    RadarResult,
)
from app.services.browser import SessionConfig, run_scrape
from app.services.browser.extractors import (
    COMPETITION_CAP,
    DEMOGRAPHICS_CAP,
    OPPORTUNITIES_CAP,
    extract_cards,
    extract_company_cards,
    extract_panels,
    extract_table_or,
)
from app.services.browser.navigation import (
    apply_location,
    apply_optional_field,
    click_and_settle,
    navigate_to_origin,
    submit_search,
)
from app.services.browser.patterns import click_rule

logger = logging.getLogger(__name__)


async def scrape_opportunities(page, query: RadarQuery, origin: str) -> OpportunitiesResult:
    await navigate_to_origin(page, origin)
    await click_and_settle(page, click_rule("radar.opportunities"))
    await apply_location(page, query.uf, query.municipio)
    await apply_optional_field(page, "setor", query.setor)
    await apply_optional_field(page, "termo", query.termo)
    await submit_search(page)

    resultados = await extract_table_or(
        page, OPPORTUNITIES_CAP, lambda: extract_cards(page, OPPORTUNITIES_CAP)
    )
    return OpportunitiesResult(
        filtros=OpportunitiesFilters(uf=query.uf, municipio=query.municipio, setor=query.setor, termo=query.termo),
        resultados=resultados,
    )


async def scrape_demographics(page, query: RadarQuery, origin: str) -> DemographicsResult:
    await navigate_to_origin(page, origin)
    await click_and_settle(page, click_rule("radar.demographics"))
    await apply_location(page, query.uf, query.municipio)
    await submit_search(page)

    paineis = await extract_panels(page, DEMOGRAPHICS_CAP)
    return DemographicsResult(
        filtros=DemographicsFilters(uf=query.uf, municipio=query.municipio),
        paineis=paineis,
    )


async def scrape_competition(page, query: RadarQuery, origin: str) -> CompetitionResult:
    await navigate_to_origin(page, origin)
    await click_and_settle(page, click_rule("radar.competition"))
    await apply_location(page, query.uf, query.municipio)
    await apply_optional_field(page, "cnae", query.cnae)
    await apply_optional_field(page, "raio_km", query.raio_km, skip_zero=True)
    await submit_search(page)

    empresas = await extract_table_or(
        page, COMPETITION_CAP, lambda: extract_company_cards(page, COMPETITION_CAP)
    )
    return CompetitionResult(
        filtros=CompetitionFilters(uf=query.uf, municipio=query.municipio, cnae=query.cnae, raio_km=query.raio_km),
        empresas=empresas,
    )


_RUNNERS = {
    "opportunities": scrape_opportunities,
    "demographics": scrape_demographics,
    "competition": scrape_competition,
}


async def scrape_radar(
    query: RadarQuery,
    config: Optional[SessionConfig] = None,
    max_retries: Optional[int] = None,
    origin: Optional[str] = None,
    **run_kwargs,
) -> RadarResult:
    """
    Executa a intenção da consulta com retry, uma sessão nova por tentativa.

    Raises:
        ScrapeError: quando todas as tentativas falham
    """
    runner = _RUNNERS[query.tipo]
    origin = origin or settings.RADAR_ORIGIN
    logger.info(f"🔍 Radar: tipo={query.tipo}, uf={query.uf}, municipio={query.municipio}")

    outcome = await run_scrape(
        lambda page: runner(page, query, origin),
        config=config,
        max_retries=max_retries,
        **run_kwargs,
    )
    if not outcome.success:
        raise ScrapeError(outcome.error_message, attempts=outcome.attempts)

    logger.info(f"✅ Radar concluído: tipo={query.tipo} em {outcome.attempts} tentativa(s)")
    return outcome.value
