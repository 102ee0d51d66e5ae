"""
Seleção da consulta a partir dos parâmetros da query string, no mesmo
contrato do endpoint legado (`/?id=...`, `/?page=...`, `/?city1=...&city2=...`,
`/?q=...`).
"""
from typing import Any, Mapping

from gazetteer.core.config import settings
from gazetteer.core.result import Err, ErrorKind, Result
from gazetteer.db.index import GazetteerIndex
from gazetteer.services.cities import compare_cities, get_city_by_id, list_cities, search_cities

USAGE = {
    "Get city by ID": "?id=524901",
    "Get cities list": "?page=1&per_page=10",
    "Compare cities": "?city1=Москва&city2=Санкт-Петербург",
    "Search cities": "?q=Мос",
}


def to_int(value: Any, default: int) -> int:
    """Converte parâmetro para int; texto não numérico vira 0 (normalizado depois)."""
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


def dispatch(index: GazetteerIndex, params: Mapping[str, Any]) -> Result:
    """Executa exatamente uma consulta, escolhida pelos parâmetros presentes."""
    if "id" in params:
        return get_city_by_id(index, params["id"])

    if "page" in params or "per_page" in params:
        return list_cities(
            index,
            to_int(params.get("page"), 1),
            to_int(params.get("per_page"), settings.default_per_page),
        )

    if "city1" in params and "city2" in params:
        return compare_cities(index, params["city1"], params["city2"])

    if "q" in params:
        return search_cities(index, params["q"])

    return Err(ErrorKind.INVALID_REQUEST, "Invalid request", {"usage": USAGE})
