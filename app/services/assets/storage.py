"""
Resolução de arquivos estáticos (planilhas e PDFs) no diretório de assets.
"""

import logging
from pathlib import Path
from typing import Optional

from app.core.config import settings
from app.core.errors import AssetNotFoundError

logger = logging.getLogger(__name__)


def assets_root(base_dir: Optional[str] = None) -> Path:
    return Path(base_dir or settings.ASSETS_DIR).resolve()


def resolve_asset(name: str, base_dir: Optional[str] = None) -> Path:
    """
    Caminho absoluto de um asset dentro do diretório configurado.

    Raises:
        AssetNotFoundError: arquivo ausente ou caminho fora do diretório de assets
    """
    root = assets_root(base_dir)
    candidate = (root / name).resolve()
    if root not in candidate.parents or not candidate.is_file():
        logger.warning(f"⚠️ Asset não encontrado: {name}")
        raise AssetNotFoundError(name)
    return candidate
