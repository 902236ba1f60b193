"""
Gerenciador de sessão isolada do navegador.

Cada sessão = um processo Chromium + um contexto + uma página, criada por
requisição e nunca reaproveitada. O encerramento é garantido em todos os
caminhos de saída e acontece exatamente uma vez.
"""

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from playwright.async_api import async_playwright

from .models import SessionConfig, SessionState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BrowserSession:
    """
    Sessão de navegador de uso único.

    Uso:
        async with BrowserSession(config) as session:
            await session.page.goto(...)

    ou:
        result = await BrowserSession(config).run(task)
    """

    def __init__(self, config: Optional[SessionConfig] = None, playwright_factory: Callable = async_playwright):
        self.config = config or SessionConfig.from_settings()
        self._playwright_factory = playwright_factory
        self.state = SessionState.CREATED
        self._playwright = None
        self._browser = None
        self._context = None
        self.page = None

    async def acquire(self) -> 'BrowserSession':
        """
        Inicia Playwright, lança o Chromium e abre contexto + página.

        Falha no lançamento é fatal para a tentativa: o que já foi aberto é
        liberado e a exceção propaga para o orquestrador.
        """
        if self.state is not SessionState.CREATED:
            raise RuntimeError(f"Sessão não pode ser adquirida no estado {self.state.value}")

        try:
            self._playwright = await self._playwright_factory().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                args=list(self.config.launch_args),
            )
            self._context = await self._browser.new_context(
                viewport=self.config.viewport,
                user_agent=self.config.user_agent,
            )
            self._context.set_default_timeout(self.config.action_timeout_ms)
            self.page = await self._context.new_page()
        except Exception:
            logger.warning("❌ Falha ao iniciar sessão do navegador", exc_info=True)
            await self.release()
            raise

        self.state = SessionState.ACTIVE
        logger.debug("🌐 Sessão do navegador ativa")
        return self

    async def release(self) -> None:
        """Fecha contexto, navegador e driver. Idempotente: só a primeira chamada fecha."""
        if self.state is SessionState.CLOSED:
            return
        self.state = SessionState.CLOSED

        for name, closer in (
            ("context", self._context.close if self._context else None),
            ("browser", self._browser.close if self._browser else None),
            ("playwright", self._playwright.stop if self._playwright else None),
        ):
            if closer is None:
                continue
            try:
                await closer()
            except Exception as e:
                # Falha ao fechar um recurso não impede fechar os demais
                logger.warning(f"⚠️ Erro ao fechar {name}: {e}")

        self._context = None
        self._browser = None
        self._playwright = None
        self.page = None
        logger.debug("🔒 Sessão do navegador encerrada")

    async def run(self, task: Callable[[Any], Awaitable[T]]) -> T:
        """Adquire a sessão, executa task(page) e libera em qualquer caminho de saída."""
        await self.acquire()
        try:
            return await task(self.page)
        finally:
            await self.release()

    async def __aenter__(self) -> 'BrowserSession':
        return await self.acquire()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.release()
