from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class CityBase(BaseModel):
    """Schema base para cidade"""
    model_config = ConfigDict(from_attributes=True)

    geonameid: str = Field(..., description="ID GeoNames")
    name: str = Field(..., description="Nome da cidade")
    asciiname: str = Field(..., description="Nome da cidade em ASCII")
    latitude: float = Field(..., description="Latitude")
    longitude: float = Field(..., description="Longitude")
    population: int = Field(..., description="População")
    timezone: str = Field(..., description="Fuso horário IANA")


class CityRead(CityBase):
    """Schema para leitura de uma cidade por ID"""
    alternatenames: List[str] = Field(default_factory=list, description="Nomes alternativos")


class CityListItem(CityBase):
    """Item da listagem paginada (sem nomes alternativos)"""


class CityPage(BaseModel):
    page: int = Field(..., ge=1)
    per_page: int = Field(..., ge=1, le=100)
    total_cities: int = Field(..., description="Total de cidades no dataset completo")
    total_pages: int
    data: List[CityListItem]


class SearchHit(BaseModel):
    id: str = Field(..., description="ID GeoNames")
    name: str
    alt_name: Optional[str] = Field(None, description="Nome alternativo que casou com a busca")
    population: int


class SearchResponse(BaseModel):
    query: str = Field(..., description="Consulta normalizada (trim + minúsculas)")
    found: int = Field(..., description="Total de resultados antes do corte")
    results: List[SearchHit]


class CitySummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    latitude: float
    longitude: float
    timezone: str
    population: int


class Comparison(BaseModel):
    northern_city: str
    latitude_difference_km: float
    same_timezone: bool
    timezone_difference_hours: float


class CompareResponse(BaseModel):
    city1: CitySummary
    city2: CitySummary
    comparison: Comparison


class ErrorResponse(BaseModel):
    """Corpo de erro. Campos extras dependem do tipo de erro."""
    error: str
    city1_found: Optional[bool] = None
    city2_found: Optional[bool] = None
    usage: Optional[Dict[str, str]] = None
