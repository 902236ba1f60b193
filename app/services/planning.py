"""
Scraping das ferramentas de planejamento: Planejadora e PNBox.

As duas seguem o mesmo roteiro do Radar, com um passo extra para abrir a
etapa pedida pelo rótulo informado na consulta.
"""

import logging
from typing import Optional

from app.core.config import settings
from app.core.errors import ScrapeError
from app.schemas.planning import (
    PlanejadoraFilters,
    PlanejadoraQuery,
    PlanejadoraResult,
    PNBoxFilters,
    PNBoxQuery,
    PNBoxResult,
)
from app.services.browser import SessionConfig, StepResult, run_scrape
from app.services.browser.extractors import BLOCKS_CAP, BLOCK_TEXT_LIMIT, extract_blocks, extract_table_or
from app.services.browser.navigation import (
    apply_location,
    apply_optional_field,
    click_first_of,
    navigate_to_origin,
    settle,
    submit_search,
)
from app.services.browser.patterns import ClickRule, click_rule, label_rule

logger = logging.getLogger(__name__)


async def open_entry(page, step: str) -> StepResult:
    """Entrada da ferramenta: link ou botão com o mesmo padrão."""
    rule = click_rule(step)
    result = await click_first_of(page, [rule, ClickRule(rule.step, "button", rule.pattern)])
    await settle(page)
    return result


async def open_stage(page, etapa: Optional[str], step: str) -> StepResult:
    """Abre a etapa cujo rótulo foi pedido, seja link ou botão."""
    if not etapa or not etapa.strip():
        return StepResult(step=step, applied=False, detail="não informado")
    result = await click_first_of(page, [
        label_rule(step, etapa, role="link"),
        label_rule(step, etapa, role="button"),
        label_rule(step, etapa, role="tab"),
    ])
    await settle(page)
    return result


async def scrape_planejadora_page(page, query: PlanejadoraQuery, origin: str) -> PlanejadoraResult:
    await navigate_to_origin(page, origin)
    await open_entry(page, "planejadora.entry")
    await open_stage(page, query.etapa, "planejadora.stage")
    await apply_location(page, query.uf, query.municipio)
    await apply_optional_field(page, "termo", query.termo)
    await submit_search(page)

    blocos = await extract_table_or(page, BLOCKS_CAP, lambda: extract_blocks(page, BLOCKS_CAP, BLOCK_TEXT_LIMIT))
    return PlanejadoraResult(
        filtros=PlanejadoraFilters(uf=query.uf, municipio=query.municipio, termo=query.termo, etapa=query.etapa),
        blocos=blocos,
    )


async def scrape_pnbox_page(page, query: PNBoxQuery, origin: str) -> PNBoxResult:
    await navigate_to_origin(page, origin)
    await open_entry(page, "pnbox.entry")
    await open_stage(page, query.etapa, "pnbox.stage")
    await apply_location(page, query.uf, query.municipio)
    await apply_optional_field(page, "segmento", query.segmento)
    await apply_optional_field(page, "termo", query.termo)
    await submit_search(page)

    secoes = await extract_table_or(page, BLOCKS_CAP, lambda: extract_blocks(page, BLOCKS_CAP, BLOCK_TEXT_LIMIT))
    return PNBoxResult(
        filtros=PNBoxFilters(
            uf=query.uf,
            municipio=query.municipio,
            segmento=query.segmento,
            termo=query.termo,
            etapa=query.etapa,
        ),
        secoes=secoes,
    )


async def _run(label: str, runner, query, origin: str, config, max_retries, run_kwargs):
    outcome = await run_scrape(lambda page: runner(page, query, origin), config=config, max_retries=max_retries, **run_kwargs)
    if not outcome.success:
        raise ScrapeError(outcome.error_message, attempts=outcome.attempts)
    logger.info(f"✅ {label} concluído em {outcome.attempts} tentativa(s)")
    return outcome.value


async def scrape_planejadora(
    query: PlanejadoraQuery,
    config: Optional[SessionConfig] = None,
    max_retries: Optional[int] = None,
    origin: Optional[str] = None,
    **run_kwargs,
) -> PlanejadoraResult:
    logger.info(f"🔍 Planejadora: uf={query.uf}, municipio={query.municipio}, etapa={query.etapa}")
    return await _run(
        "Planejadora", scrape_planejadora_page, query,
        origin or settings.PLANEJADORA_ORIGIN, config, max_retries, run_kwargs,
    )


async def scrape_pnbox(
    query: PNBoxQuery,
    config: Optional[SessionConfig] = None,
    max_retries: Optional[int] = None,
    origin: Optional[str] = None,
    **run_kwargs,
) -> PNBoxResult:
    logger.info(f"🔍 PNBox: segmento={query.segmento}, etapa={query.etapa}")
    return await _run(
        "PNBox", scrape_pnbox_page, query,
        origin or settings.PNBOX_ORIGIN, config, max_retries, run_kwargs,
    )
