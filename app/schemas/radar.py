"""
Schemas Pydantic para o endpoint do Radar.
"""
from typing import List, Literal, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.schemas.records import CardRecord, CompanyCard, Panel, RowRecord


class RadarQuery(BaseModel):
    """
    Consulta ao Radar.

    Campos:
        tipo: opportunities | demographics | competition
        uf: sigla da UF (2 caracteres)
        municipio: nome do município (mínimo 2 caracteres)
        setor, termo, cnae, raio_km: filtros opcionais
    """
    tipo: Literal["opportunities", "demographics", "competition"] = Field(
        ..., validation_alias=AliasChoices("tipo", "intent")
    )
    uf: str = Field(..., min_length=2, max_length=2, validation_alias=AliasChoices("uf", "region"))
    municipio: str = Field(..., min_length=2, validation_alias=AliasChoices("municipio", "locality"))
    setor: Optional[str] = Field(None, validation_alias=AliasChoices("setor", "category"))
    termo: Optional[str] = Field(None, validation_alias=AliasChoices("termo", "term"))
    cnae: Optional[str] = Field(None, validation_alias=AliasChoices("cnae", "activity_code", "activity-code"))
    raio_km: Optional[float] = Field(None, ge=0, validation_alias=AliasChoices("raio_km", "radius_km", "radius"))

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tipo": "competition",
                "uf": "SP",
                "municipio": "Campinas",
                "cnae": "6201-5",
            }
        }
    )


class OpportunitiesFilters(BaseModel):
    uf: str
    municipio: str
    setor: Optional[str] = None
    termo: Optional[str] = None


class DemographicsFilters(BaseModel):
    uf: str
    municipio: str


class CompetitionFilters(BaseModel):
    uf: str
    municipio: str
    cnae: Optional[str] = None
    raio_km: Optional[float] = None


class OpportunitiesResult(BaseModel):
    origem: Literal["opportunities"] = "opportunities"
    filtros: OpportunitiesFilters
    resultados: List[Union[RowRecord, CardRecord]] = Field(default_factory=list, max_length=60)


class DemographicsResult(BaseModel):
    origem: Literal["demographics"] = "demographics"
    filtros: DemographicsFilters
    paineis: List[Panel] = Field(default_factory=list, max_length=40)


class CompetitionResult(BaseModel):
    origem: Literal["competition"] = "competition"
    filtros: CompetitionFilters
    empresas: List[Union[RowRecord, CompanyCard]] = Field(default_factory=list, max_length=100)


RadarResult = Union[OpportunitiesResult, DemographicsResult, CompetitionResult]
