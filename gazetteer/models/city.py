from pydantic import BaseModel, ConfigDict, Field
from typing import Tuple


class CityRecord(BaseModel):
    """Uma linha do dataset GeoNames (RU.txt). Imutável após a carga."""

    model_config = ConfigDict(frozen=True)

    geonameid: str = Field(..., description="ID vindo do dataset (coluna 0), mantido como texto")
    name: str = Field(..., description="Nome principal da cidade (UTF-8)")
    asciiname: str = Field("", description="Nome transliterado em ASCII")
    alternatenames: Tuple[str, ...] = Field(
        default=(),
        description="Nomes alternativos, na ordem da coluna 3 separada por vírgula",
    )
    latitude: float = Field(0.0, description="Latitude em graus")
    longitude: float = Field(0.0, description="Longitude em graus")
    population: int = Field(0, ge=0, description="População")
    timezone: str = Field("", description="Identificador IANA do fuso horário")
