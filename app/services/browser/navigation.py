"""
Heurísticas de navegação best-effort.

Toda interação tolera "elemento não encontrado": o passo devolve um
StepResult com applied=False e a execução segue. Só a carga inicial da
origem (goto) propaga erro, pois sem página não há o que extrair.
"""

import logging
from typing import Iterable, Optional

from playwright.async_api import Error as PlaywrightError

from app.core.config import settings
from .models import StepResult
from .patterns import ClickRule, FieldRule, click_rule, field_rule

logger = logging.getLogger(__name__)


def _skipped(step: str, error: Exception) -> StepResult:
    detail = str(error).splitlines()[0] if str(error) else error.__class__.__name__
    logger.debug(f"↪️ Passo '{step}' não aplicado: {detail}")
    return StepResult(step=step, applied=False, detail=detail)


async def settle(page, idle_timeout_ms: Optional[int] = None, step: str = "settle") -> StepResult:
    """Aguarda quiescência de rede. Timeout não é erro: segue em frente."""
    timeout = settings.NETWORK_IDLE_TIMEOUT_MS if idle_timeout_ms is None else idle_timeout_ms
    try:
        await page.wait_for_load_state("networkidle", timeout=timeout)
    except PlaywrightError as e:
        return _skipped(step, e)
    return StepResult(step=step, applied=True)


async def navigate_to_origin(page, url: str, idle_timeout_ms: Optional[int] = None) -> StepResult:
    """Carrega a origem até o DOM estar pronto e depois espera a rede assentar."""
    logger.debug(f"🌐 Abrindo {url}")
    await page.goto(url, wait_until="domcontentloaded")
    await settle(page, idle_timeout_ms, step="origin.networkidle")
    return StepResult(step="origin", applied=True, detail=url)


async def click_first_match(page, rule: ClickRule, timeout_ms: Optional[int] = None) -> StepResult:
    """Clica no primeiro elemento do papel da regra cujo nome acessível casa com o padrão."""
    try:
        locator = page.get_by_role(rule.role, name=rule.regex).first
        await locator.click(timeout=timeout_ms or settings.ACTION_TIMEOUT_MS)
    except PlaywrightError as e:
        return _skipped(rule.step, e)
    logger.debug(f"🖱️ Clique aplicado: {rule.step}")
    return StepResult(step=rule.step, applied=True)


async def click_first_of(page, rules: Iterable[ClickRule], timeout_ms: Optional[int] = None) -> StepResult:
    """Tenta as regras em ordem e para na primeira que clicar."""
    result = None
    for rule in rules:
        result = await click_first_match(page, rule, timeout_ms)
        if result.applied:
            return result
    return result or StepResult(step="click", applied=False, detail="nenhuma regra")


async def fill_first_match(page, rule: FieldRule, value: str, timeout_ms: Optional[int] = None) -> StepResult:
    """Preenche o primeiro input cujo label OU placeholder casa com o padrão."""
    try:
        field = page.get_by_label(rule.label_regex).or_(page.get_by_placeholder(rule.placeholder_regex))
        await field.first.fill(value, timeout=timeout_ms or settings.ACTION_TIMEOUT_MS)
    except PlaywrightError as e:
        return _skipped(rule.step, e)
    logger.debug(f"⌨️ Campo preenchido: {rule.step}")
    return StepResult(step=rule.step, applied=True)


async def click_and_settle(page, rule: ClickRule) -> StepResult:
    result = await click_first_match(page, rule)
    await settle(page)
    return result


async def apply_optional_field(page, step: str, value, skip_zero: bool = False) -> StepResult:
    """
    Preenche um campo opcional; valor ausente pula o passo sem tocar na página.
    Com skip_zero, zero também conta como ausente (raio 0 não filtra nada).
    """
    if value is None or value == "" or (skip_zero and value == 0):
        return StepResult(step=step, applied=False, detail="não informado")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return await fill_first_match(page, field_rule(step), str(value))


async def apply_location(page, uf: Optional[str], municipio: Optional[str]) -> list:
    """UF e município são sempre tentados quando presentes na consulta."""
    return [
        await apply_optional_field(page, "uf", uf),
        await apply_optional_field(page, "municipio", municipio),
    ]


async def submit_search(page) -> StepResult:
    """Clica em buscar/pesquisar/aplicar/ver e espera a rede."""
    return await click_and_settle(page, click_rule("search"))
