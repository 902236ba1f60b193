"""
Schemas Pydantic para a Planejadora e o PNBox.
"""
from typing import List, Literal, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.schemas.records import Block, RowRecord


class PlanejadoraQuery(BaseModel):
    """Consulta à Planejadora. UF obrigatória; demais campos opcionais."""
    uf: str = Field(..., min_length=2, max_length=2, validation_alias=AliasChoices("uf", "region"))
    municipio: Optional[str] = Field(None, min_length=2, validation_alias=AliasChoices("municipio", "locality"))
    termo: Optional[str] = Field(None, validation_alias=AliasChoices("termo", "term"))
    etapa: Optional[str] = Field(None, description="Rótulo da etapa a abrir", validation_alias=AliasChoices("etapa", "stage"))

    model_config = ConfigDict(
        json_schema_extra={"example": {"uf": "MG", "municipio": "Uberlândia", "etapa": "Mercado"}}
    )


class PNBoxQuery(BaseModel):
    """Consulta ao PNBox. Nenhum campo obrigatório."""
    uf: Optional[str] = Field(None, min_length=2, max_length=2, validation_alias=AliasChoices("uf", "region"))
    municipio: Optional[str] = Field(None, min_length=2, validation_alias=AliasChoices("municipio", "locality"))
    segmento: Optional[str] = Field(None, validation_alias=AliasChoices("segmento", "segment"))
    termo: Optional[str] = Field(None, validation_alias=AliasChoices("termo", "term"))
    etapa: Optional[str] = Field(None, validation_alias=AliasChoices("etapa", "stage"))

    model_config = ConfigDict(
        json_schema_extra={"example": {"segmento": "Alimentação", "etapa": "Plano de Marketing"}}
    )


class PlanejadoraFilters(BaseModel):
    uf: str
    municipio: Optional[str] = None
    termo: Optional[str] = None
    etapa: Optional[str] = None


class PNBoxFilters(BaseModel):
    uf: Optional[str] = None
    municipio: Optional[str] = None
    segmento: Optional[str] = None
    termo: Optional[str] = None
    etapa: Optional[str] = None


class PlanejadoraResult(BaseModel):
    origem: Literal["planejadora"] = "planejadora"
    filtros: PlanejadoraFilters
    blocos: List[Union[RowRecord, Block]] = Field(default_factory=list, max_length=60)


class PNBoxResult(BaseModel):
    origem: Literal["pnbox"] = "pnbox"
    filtros: PNBoxFilters
    secoes: List[Union[RowRecord, Block]] = Field(default_factory=list, max_length=60)
