from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from gazetteer.core.config import settings
from gazetteer.core.result import ErrorKind, Result
from gazetteer.db.index import GazetteerIndex, get_index
from gazetteer.schemas.city import CityPage, CityRead, CompareResponse, ErrorResponse, SearchResponse
from gazetteer.services import cities as service
from gazetteer.services.dispatch import to_int

router = APIRouter(prefix="/cities", tags=["cities"])

ERROR_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.TIMEZONE: 422,
}


def to_response(result: Result) -> JSONResponse:
    """Converte Ok/Err em resposta HTTP; erros mantêm o corpo {"error": ...}."""
    if result.is_ok:
        return JSONResponse(result.to_payload())
    return JSONResponse(result.to_payload(), status_code=ERROR_STATUS[result.kind])


@router.get(
    "",
    response_model=CityPage,
    summary="List cities",
    description="List cities in dataset file order, with pagination",
    tags=["cities"]
)
def get_cities(
    page: Optional[str] = None,
    per_page: Optional[str] = None,
    index: GazetteerIndex = Depends(get_index),
):
    """
    Lista cidades na ordem do arquivo.

    **Parâmetros**:
    - page: página (mínimo 1)
    - per_page: itens por página (1 a 100, valores fora do intervalo são ajustados)

    Valores não numéricos são tratados como 0 e ajustados, nunca rejeitados.
    """
    return to_response(service.list_cities(
        index,
        to_int(page, 1),
        to_int(per_page, settings.default_per_page),
    ))


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Search cities",
    description="Prefix search on city names and alternate names, ranked by population",
    tags=["cities"]
)
def search_cities(
    q: str = Query("", description="Início do nome (mínimo 2 caracteres)"),
    index: GazetteerIndex = Depends(get_index),
):
    return to_response(service.search_cities(index, q))


@router.get(
    "/compare",
    response_model=CompareResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Compare two cities",
    description="Which city is further north, latitude difference in km and timezone difference in hours",
    tags=["cities"]
)
def compare_cities(
    city1: str = Query(..., description="Nome exato da primeira cidade"),
    city2: str = Query(..., description="Nome exato da segunda cidade"),
    index: GazetteerIndex = Depends(get_index),
):
    """
    Compara duas cidades pelo nome (ou nome alternativo) exato.

    A diferença de fuso é calculada com o offset UTC de cada zona no momento
    da consulta.
    """
    return to_response(service.compare_cities(index, city1, city2))


@router.get(
    "/{city_id}",
    response_model=CityRead,
    responses={404: {"model": ErrorResponse}},
    summary="Get city by ID",
    tags=["cities"]
)
def get_city(city_id: str, index: GazetteerIndex = Depends(get_index)):
    return to_response(service.get_city_by_id(index, city_id))
