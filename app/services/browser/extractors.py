"""
Extratores de conteúdo de página.

Mesmo formato para toda intenção:
1. Layout de tabela (linhas) tem prioridade e encerra a busca.
2. Sem tabela, cai para cards/seções.

Cada leitura (linhas, heading, texto) é individualmente best-effort:
uma falha vira valor vazio/None naquele campo, nunca aborta a extração.
"""

import logging
from typing import Awaitable, Callable, List, Optional

from playwright.async_api import Error as PlaywrightError

from app.schemas.records import Block, CardRecord, CompanyCard, Panel, RowRecord

logger = logging.getLogger(__name__)

ROW_SELECTOR = "table tbody tr"
CELL_SELECTOR = "td"
CARD_SELECTOR = '[role="article"], .card, .MuiCard-root'
PANEL_SELECTOR = "section,[role='region']"
HIGHLIGHT_SELECTOR = "strong,.value,.metric,.counter"
BLOCK_SELECTOR = "section, article, [role='region'], [role=\"article\"], .card, .MuiCard-root"

# Limites por intenção
OPPORTUNITIES_CAP = 60
COMPETITION_CAP = 100
DEMOGRAPHICS_CAP = 40
BLOCKS_CAP = 60
PANEL_TEXT_LIMIT = 1500
BLOCK_TEXT_LIMIT = 1200


async def _locate_all(scope, selector: str) -> list:
    try:
        return await scope.locator(selector).all()
    except PlaywrightError as e:
        logger.debug(f"Seletor '{selector}' falhou: {e}")
        return []


async def _inner_texts(element, selector: str) -> List[str]:
    try:
        return await element.locator(selector).all_inner_texts()
    except PlaywrightError as e:
        logger.debug(f"Leitura de '{selector}' falhou: {e}")
        return []


async def _text(element) -> Optional[str]:
    try:
        return await element.text_content()
    except PlaywrightError as e:
        logger.debug(f"Leitura de texto falhou: {e}")
        return None


async def _heading(element) -> Optional[str]:
    """Texto do primeiro heading descendente, sem espaços nas pontas; None se ausente ou vazio."""
    try:
        headings = element.get_by_role("heading")
        if not await headings.count():
            return None
        text = await headings.first.text_content()
    except PlaywrightError as e:
        logger.debug(f"Leitura de heading falhou: {e}")
        return None
    text = (text or "").strip()
    return text or None


def _clip(text: Optional[str], limit: Optional[int]) -> Optional[str]:
    text = (text or "").strip()
    if limit is not None:
        text = text[:limit]
    return text or None


async def extract_rows(page, cap: int) -> List[RowRecord]:
    rows = await _locate_all(page, ROW_SELECTOR)
    return [RowRecord(cols=await _inner_texts(row, CELL_SELECTOR)) for row in rows[:cap]]


async def extract_cards(page, cap: int, text_limit: Optional[int] = None) -> List[CardRecord]:
    records = []
    for card in (await _locate_all(page, CARD_SELECTOR))[:cap]:
        title = await _heading(card)
        text = _clip(await _text(card), text_limit)
        if title or text:
            records.append(CardRecord(title=title, text=text))
    return records


async def extract_company_cards(page, cap: int) -> List[CompanyCard]:
    records = []
    for card in (await _locate_all(page, CARD_SELECTOR))[:cap]:
        title = await _heading(card)
        lines = [line.strip() for line in (await _text(card) or "").split("\n")]
        lines = [line for line in lines if line]
        if title or lines:
            records.append(CompanyCard(titulo=title, linhas=lines))
    return records


async def extract_panels(page, cap: int = DEMOGRAPHICS_CAP, text_limit: int = PANEL_TEXT_LIMIT) -> List[Panel]:
    """
    Painéis demográficos: cada seção precisa de heading E (valores em destaque OU texto).
    """
    panels = []
    for section in await _locate_all(page, PANEL_SELECTOR):
        if len(panels) >= cap:
            break
        title = await _heading(section)
        if not title:
            continue
        values = [v.strip() for v in await _inner_texts(section, HIGHLIGHT_SELECTOR)]
        values = [v for v in values if v]
        text = _clip(await _text(section), text_limit) or ""
        if values or text:
            panels.append(Panel(titulo=title, valores=values, texto=text))
    return panels


async def extract_blocks(page, cap: int = BLOCKS_CAP, text_limit: int = BLOCK_TEXT_LIMIT) -> List[Block]:
    """
    Blocos de conteúdo das ferramentas de planejamento.

    Um card dentro de uma seção casa o seletor duas vezes; como a seção vem
    antes no documento, o bloco cujo texto já está contido num bloco mantido
    é descartado e não conta para o limite.
    """
    blocks = []
    kept_texts = []
    for element in await _locate_all(page, BLOCK_SELECTOR):
        if len(blocks) >= cap:
            break
        full_text = (await _text(element) or "").strip()
        if full_text and any(full_text in kept for kept in kept_texts):
            continue
        title = await _heading(element)
        text = _clip(full_text, text_limit)
        if title or text:
            blocks.append(Block(titulo=title, texto=text))
            kept_texts.append(full_text)
    return blocks


async def extract_table_or(page, cap: int, fallback: Callable[[], Awaitable[list]]) -> list:
    """
    Layout de tabela vence sempre: se houver ao menos uma linha, o fallback
    de cards nem é chamado.
    """
    rows = await extract_rows(page, cap)
    if rows:
        logger.debug(f"📋 Layout de tabela: {len(rows)} linhas")
        return rows
    records = await fallback()
    logger.debug(f"🗂️ Layout de cards: {len(records)} registros")
    return records[:cap]
