"""
Módulo de automação de navegador.

Sessão isolada por requisição, heurísticas de navegação tolerantes a
markup instável, extratores tabela/cards e retry do ciclo completo.
"""

from .models import SessionConfig, SessionState, StepResult, AttemptOutcome
from .session import BrowserSession
from .retry import run_with_retry, run_scrape

__all__ = [
    'SessionConfig',
    'SessionState',
    'StepResult',
    'AttemptOutcome',
    'BrowserSession',
    'run_with_retry',
    'run_scrape',
]
