"""
Orquestrador de retry do ciclo completo sessão -> navegação -> extração.

Só falhas estruturais chegam aqui (lançamento do navegador, goto da
origem, exceção inesperada); não-achados de seletor já foram absorvidos
pelas heurísticas. Retry imediato, sem backoff.
"""

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from tenacity import AsyncRetrying, before_sleep_log, retry_if_exception_type, stop_after_attempt, wait_none

from app.core.config import settings
from .models import AttemptOutcome, SessionConfig
from .session import BrowserSession

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 2


async def run_with_retry(task: Callable[[], Awaitable[T]], max_retries: int = DEFAULT_MAX_RETRIES) -> AttemptOutcome:
    """
    Executa task até 1 + max_retries vezes.

    Returns:
        AttemptOutcome com o valor da primeira execução bem-sucedida, ou com
        o último erro após esgotar as tentativas.
    """
    attempts = 0
    errors = []

    async def _attempt():
        nonlocal attempts
        attempts += 1
        try:
            return await task()
        except Exception as e:
            errors.append(e)
            raise

    try:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(Exception),
            stop=stop_after_attempt(1 + max(0, max_retries)),
            wait=wait_none(),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                value = await _attempt()
    except Exception as e:
        logger.error(f"❌ Falha após {attempts} tentativa(s): {e}")
        return AttemptOutcome(success=False, error=e, attempts=attempts, errors=errors)

    if attempts > 1:
        logger.info(f"✅ Sucesso na tentativa {attempts}")
    return AttemptOutcome(success=True, value=value, attempts=attempts, errors=errors)


async def run_scrape(
    task: Callable[[Any], Awaitable[T]],
    config: Optional[SessionConfig] = None,
    max_retries: Optional[int] = None,
    session_factory: Callable[..., BrowserSession] = BrowserSession,
) -> AttemptOutcome:
    """
    Cada tentativa abre uma sessão nova, executa task(page) e a encerra
    antes de decidir entre retornar ou tentar de novo.
    """
    config = config or SessionConfig.from_settings()
    retries = settings.SCRAPE_MAX_RETRIES if max_retries is None else max_retries

    async def _one_attempt():
        return await session_factory(config).run(task)

    return await run_with_retry(_one_attempt, max_retries=retries)
