"""
Colaboradores de arquivos estáticos: planilhas e PDFs já presentes em disco.
"""

from .storage import resolve_asset, assets_root

__all__ = ['resolve_asset', 'assets_root']
