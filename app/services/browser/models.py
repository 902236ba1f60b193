"""
Modelos internos da automação de navegador.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple

from app.core.config import settings


class SessionState(Enum):
    """Ciclo de vida de uma sessão: CREATED -> ACTIVE -> CLOSED."""
    CREATED = "created"
    ACTIVE = "active"
    CLOSED = "closed"


@dataclass(frozen=True)
class SessionConfig:
    """Configuração fixa por deploy de uma sessão isolada."""
    viewport_width: int = 1366
    viewport_height: int = 900
    user_agent: str = "Mozilla/5.0 Chrome"
    headless: bool = True
    launch_args: Tuple[str, ...] = ("--no-sandbox", "--disable-dev-shm-usage")
    action_timeout_ms: int = 30000

    @classmethod
    def from_settings(cls) -> 'SessionConfig':
        return cls(
            viewport_width=settings.BROWSER_VIEWPORT_WIDTH,
            viewport_height=settings.BROWSER_VIEWPORT_HEIGHT,
            user_agent=settings.BROWSER_USER_AGENT,
            headless=settings.BROWSER_HEADLESS,
            launch_args=tuple(settings.BROWSER_LAUNCH_ARGS),
            action_timeout_ms=settings.ACTION_TIMEOUT_MS,
        )

    @property
    def viewport(self) -> dict:
        return {"width": self.viewport_width, "height": self.viewport_height}


@dataclass
class StepResult:
    """Resultado explícito de um passo best-effort (clique, preenchimento, espera)."""
    step: str
    applied: bool
    detail: Optional[str] = None

    def __bool__(self) -> bool:
        return self.applied


@dataclass
class AttemptOutcome:
    """Resultado de uma execução orquestrada: sucesso com valor ou falha com o último erro."""
    success: bool
    value: Any = None
    error: Optional[BaseException] = None
    attempts: int = 0
    errors: list = field(default_factory=list)

    @property
    def error_message(self) -> Optional[str]:
        if self.error is None:
            return None
        return str(self.error) or self.error.__class__.__name__
