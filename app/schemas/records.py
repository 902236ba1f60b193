"""
Registros extraídos das páginas.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class RowRecord(BaseModel):
    """Linha de tabela: textos das células na ordem."""
    cols: List[str] = Field(default_factory=list, description="Texto de cada <td> da linha")


class CardRecord(BaseModel):
    """Card de oportunidade (layout sem tabela)."""
    title: Optional[str] = Field(None, description="Texto do primeiro heading do card")
    text: Optional[str] = Field(None, description="Texto completo do card")


class CompanyCard(BaseModel):
    """Card de empresa concorrente, com o texto quebrado em linhas."""
    titulo: Optional[str] = None
    linhas: List[str] = Field(default_factory=list)


class Panel(BaseModel):
    """Painel de dados demográficos."""
    titulo: str
    valores: List[str] = Field(default_factory=list, description="Valores em destaque (strong/.value/.metric/.counter)")
    texto: str = ""


class Block(BaseModel):
    """Bloco/seção das ferramentas de planejamento."""
    titulo: Optional[str] = None
    texto: Optional[str] = None
