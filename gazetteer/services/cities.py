"""
Consultas sobre o índice do gazetteer: por ID, listagem paginada, busca por
prefixo e comparação entre duas cidades.

Todas recebem o GazetteerIndex explicitamente e retornam Ok/Err.
"""
import logging
import math
from datetime import datetime, timezone
from typing import List, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from gazetteer.core.result import Err, ErrorKind, Ok, Result
from gazetteer.db.index import GazetteerIndex
from gazetteer.models.city import CityRecord
from gazetteer.schemas.city import (
    CityListItem,
    CityPage,
    CityRead,
    CitySummary,
    Comparison,
    CompareResponse,
    SearchHit,
    SearchResponse,
)

logger = logging.getLogger(__name__)

MAX_PER_PAGE = 100
SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 20
# Aproximação plana do comprimento de 1 grau de meridiano
KM_PER_DEGREE_LATITUDE = 111.32

# ZoneInfo levanta ValueError para chaves malformadas e OSError para diretórios
_ZONE_ERRORS = (ZoneInfoNotFoundError, ValueError, OSError)


def get_city_by_id(index: GazetteerIndex, city_id: Union[int, str]) -> Result:
    record = index.get(city_id)
    if record is None:
        return Err(ErrorKind.NOT_FOUND, "City not found")
    return Ok(CityRead.model_validate(record))


def list_cities(index: GazetteerIndex, page: int, per_page: int) -> Result:
    """
    Página de cidades na ordem do arquivo.

    page < 1 vira 1 e per_page é limitado a [1, 100]. Páginas além do fim
    retornam data vazio. total_cities/total_pages consideram o dataset todo.
    """
    page = max(1, page)
    per_page = max(1, min(MAX_PER_PAGE, per_page))

    start = (page - 1) * per_page
    end = start + per_page
    window = index.records[start:end]

    total = len(index)
    return Ok(CityPage(
        page=page,
        per_page=per_page,
        total_cities=total,
        total_pages=math.ceil(total / per_page),
        data=[CityListItem.model_validate(record) for record in window],
    ))


def _match_alias(record: CityRecord, query: str) -> Optional[str]:
    # compara sem espaços, mas devolve o nome como está no dataset
    for alt_name in record.alternatenames:
        if alt_name.strip().lower().startswith(query):
            return alt_name
    return None


def search_cities(index: GazetteerIndex, query: Optional[str]) -> Result:
    """
    Busca por prefixo (case-insensitive) no nome e, se não casar, nos nomes
    alternativos. Ordena por população decrescente e devolve até 20 itens.
    """
    query = (query or "").strip().lower()
    if len(query) < SEARCH_MIN_LENGTH:
        return Err(ErrorKind.VALIDATION, "Query should be at least 2 characters long")

    hits: List[SearchHit] = []
    for record in index:
        if record.name.lower().startswith(query):
            hits.append(SearchHit(id=record.geonameid, name=record.name, population=record.population))
            continue

        alt_name = _match_alias(record, query)
        if alt_name is not None:
            hits.append(SearchHit(
                id=record.geonameid,
                name=record.name,
                alt_name=alt_name,
                population=record.population,
            ))

    # sorted() é estável: empates mantêm a ordem do arquivo
    hits = sorted(hits, key=lambda hit: hit.population, reverse=True)

    logger.debug("Search %r matched %d cities", query, len(hits))
    return Ok(SearchResponse(query=query, found=len(hits), results=hits[:SEARCH_LIMIT]))


def resolve_by_name(index: GazetteerIndex, name: str) -> Optional[CityRecord]:
    """
    Encontra a cidade pelo nome exato (ou nome alternativo exato).
    Com vários candidatos, vence a maior população; empate fica com o primeiro.
    """
    candidates = [
        record for record in index
        if record.name == name or name in record.alternatenames
    ]
    if not candidates:
        return None
    return sorted(candidates, key=lambda record: record.population, reverse=True)[0]


def _utc_offset_seconds(tz_name: str, now: datetime) -> float:
    return now.astimezone(ZoneInfo(tz_name)).utcoffset().total_seconds()


def compare_cities(
    index: GazetteerIndex,
    name1: str,
    name2: str,
    now: Optional[datetime] = None,
) -> Result:
    """
    Compara duas cidades: qual fica mais ao norte, diferença de latitude em km
    e diferença de fuso horário em horas.

    A diferença de fuso usa o offset de cada zona no instante `now` (padrão:
    agora, UTC), portanto depende do horário de verão vigente na consulta.
    """
    city1 = resolve_by_name(index, name1)
    city2 = resolve_by_name(index, name2)

    if city1 is None or city2 is None:
        return Err(
            ErrorKind.NOT_FOUND,
            "One or both cities not found",
            {"city1_found": city1 is not None, "city2_found": city2 is not None},
        )

    northern_city = city1.name if city1.latitude >= city2.latitude else city2.name
    latitude_diff = abs(city1.latitude - city2.latitude)

    same_timezone = city1.timezone == city2.timezone
    timezone_diff = 0.0

    if not same_timezone:
        now = now or datetime.now(timezone.utc)
        offsets = []
        for tz_name in (city1.timezone, city2.timezone):
            try:
                offsets.append(_utc_offset_seconds(tz_name, now))
            except _ZONE_ERRORS as exc:
                logger.warning("Timezone lookup failed for %r: %s", tz_name, exc)
                return Err(ErrorKind.TIMEZONE, f"Unknown timezone: {tz_name}")
        timezone_diff = (offsets[0] - offsets[1]) / 3600

    return Ok(CompareResponse(
        city1=CitySummary.model_validate(city1),
        city2=CitySummary.model_validate(city2),
        comparison=Comparison(
            northern_city=northern_city,
            latitude_difference_km=round(latitude_diff * KM_PER_DEGREE_LATITUDE, 2),
            same_timezone=same_timezone,
            timezone_difference_hours=timezone_diff,
        ),
    ))
