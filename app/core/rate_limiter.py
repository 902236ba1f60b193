"""
Rate limiter por cliente com janela deslizante.

Cada cliente (endereço de origem) guarda os instantes das requisições
aceitas; em qualquer intervalo de window_seconds cabem no máximo
max_requests delas.
"""

import time
import logging
from collections import OrderedDict, deque
from typing import Callable

from fastapi import HTTPException, Request, status

from app.core.config import settings

logger = logging.getLogger(__name__)


class SlidingWindow:
    """Janela de um cliente. Não bloqueia: ou há vaga agora ou a requisição é recusada."""

    def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = float(window_seconds)
        self._clock = clock
        self.hits = deque()

    def _evict(self, now: float):
        cutoff = now - self.window_seconds
        while self.hits and self.hits[0] <= cutoff:
            self.hits.popleft()

    def try_acquire(self) -> bool:
        now = self._clock()
        self._evict(now)
        if len(self.hits) < self.max_requests:
            self.hits.append(now)
            return True
        return False

    def retry_after(self) -> float:
        """Segundos até a requisição mais antiga sair da janela."""
        now = self._clock()
        self._evict(now)
        if len(self.hits) < self.max_requests:
            return 0.0
        return self.hits[0] + self.window_seconds - now

    @property
    def is_idle(self) -> bool:
        self._evict(self._clock())
        return not self.hits


class RateLimiter:
    """
    Gerencia uma janela por cliente, em ordem de uso recente.

    O acesso é síncrono (sem await entre leitura e escrita), então não
    precisa de lock no event loop.
    """

    # Acima disso, janelas ociosas são descartadas; sem nenhuma ociosa, sai a menos recente
    MAX_TRACKED_CLIENTS = 10_000

    def __init__(
        self,
        max_requests: int = None,
        window_seconds: float = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests or settings.RATE_LIMIT_MAX_REQUESTS
        self.window_seconds = window_seconds or settings.RATE_LIMIT_WINDOW_SECONDS
        self._clock = clock
        self._windows: "OrderedDict[str, SlidingWindow]" = OrderedDict()

    def _get_or_create_window(self, client: str) -> SlidingWindow:
        window = self._windows.get(client)
        if window is None:
            if len(self._windows) >= self.MAX_TRACKED_CLIENTS:
                self._prune()
            window = SlidingWindow(self.max_requests, self.window_seconds, clock=self._clock)
            self._windows[client] = window
        else:
            self._windows.move_to_end(client)
        return window

    def _prune(self):
        idle = [key for key, window in self._windows.items() if window.is_idle]
        for key in idle:
            del self._windows[key]
        while len(self._windows) >= self.MAX_TRACKED_CLIENTS:
            evicted, _ = self._windows.popitem(last=False)
            logger.debug(f"RateLimiter: descartando janela de {evicted}")

    def allow(self, client: str) -> bool:
        allowed = self._get_or_create_window(client).try_acquire()
        if not allowed:
            logger.warning(f"🚦 RateLimiter: limite atingido para {client}")
        return allowed

    def retry_after(self, client: str) -> float:
        return self._get_or_create_window(client).retry_after()

    def reset(self, client: str = None):
        if client:
            self._windows.pop(client, None)
        else:
            self._windows.clear()


rate_limiter = RateLimiter()


async def enforce_rate_limit(request: Request) -> None:
    """Dependência FastAPI aplicada a todas as rotas."""
    client = request.client.host if request.client else "unknown"
    if not rate_limiter.allow(client):
        retry_after = max(1, int(rate_limiter.retry_after(client) + 0.999))
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Muitas requisições, tente novamente mais tarde",
            headers={"Retry-After": str(retry_after)},
        )
