"""
Índice em memória do gazetteer.

O dataset é lido uma única vez no startup e vira um GazetteerIndex imutável:
uma sequência na ordem do arquivo (base da paginação) e um mapa por
geonameid (busca O(1)). Nada é alterado depois da carga.
"""
import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple, Union

from fastapi import Request

from gazetteer.db.loader import Source, load_records
from gazetteer.models.city import CityRecord

logger = logging.getLogger(__name__)


class GazetteerIndex:
    __slots__ = ("_records", "_by_geonameid")

    def __init__(self, records: Tuple[CityRecord, ...], by_geonameid: Mapping[str, CityRecord]):
        self._records = records
        self._by_geonameid = by_geonameid

    @classmethod
    def from_records(cls, records: Iterable[CityRecord]) -> "GazetteerIndex":
        """
        Constrói o índice. Em IDs repetidos a última linha substitui a anterior,
        mas a cidade continua na posição da primeira ocorrência.
        """
        ordered = []
        positions = {}
        for record in records:
            position = positions.get(record.geonameid)
            if position is not None:
                logger.debug("Duplicate geonameid %s replaces earlier row", record.geonameid)
                ordered[position] = record
                continue
            positions[record.geonameid] = len(ordered)
            ordered.append(record)
        by_id = {record.geonameid: record for record in ordered}
        return cls(tuple(ordered), MappingProxyType(by_id))

    @property
    def records(self) -> Tuple[CityRecord, ...]:
        return self._records

    @property
    def by_geonameid(self) -> Mapping[str, CityRecord]:
        return self._by_geonameid

    def get(self, city_id: Union[int, str]) -> Optional[CityRecord]:
        return self._by_geonameid.get(str(city_id).strip())

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)


def load_index(source: Source, encoding: str = "utf-8") -> GazetteerIndex:
    """Lê o dataset e retorna o índice pronto para consultas."""
    return GazetteerIndex.from_records(load_records(source, encoding=encoding))


def get_index(request: Request) -> GazetteerIndex:
    """Dependency do FastAPI para obter o índice carregado no startup."""
    return request.app.state.index
