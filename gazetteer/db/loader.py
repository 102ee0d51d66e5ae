"""
Carga do dataset GeoNames (formato tab-separated, uma cidade por linha).

Colunas consumidas:
    0  geonameid        1  name            2  asciiname
    3  alternatenames   4  latitude        5  longitude
    14 population       17 timezone

Linhas com menos de 18 colunas são descartadas silenciosamente. Erros de
conversão numérica viram 0. Só a falha ao abrir o arquivo interrompe a carga.
"""
import logging
import math
import os
from typing import List, Optional, Union

from gazetteer.core.exceptions import LoadError
from gazetteer.models.city import CityRecord

logger = logging.getLogger(__name__)

MIN_FIELDS = 18

Source = Union[str, os.PathLike]


def _parse_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        return 0.0
    # "nan"/"inf" não são coordenadas válidas nem serializáveis em JSON
    return number if math.isfinite(number) else 0.0


def _parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        pass
    # "123.0" e similares são truncados
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return 0


def split_alternatenames(raw: str) -> tuple:
    """Separa a coluna 3 por vírgula mantendo a ordem. Coluna vazia -> ()."""
    if not raw:
        return ()
    return tuple(raw.split(","))


def parse_line(line: str) -> Optional[CityRecord]:
    """
    Converte uma linha do arquivo em CityRecord.
    Retorna None se a linha tiver menos de 18 colunas.
    """
    data = line.rstrip().split("\t")
    if len(data) < MIN_FIELDS:
        return None

    return CityRecord(
        geonameid=data[0].strip(),
        name=data[1],
        asciiname=data[2],
        alternatenames=split_alternatenames(data[3]),
        latitude=_parse_float(data[4]),
        longitude=_parse_float(data[5]),
        population=max(0, _parse_int(data[14])),
        timezone=data[17].strip(),
    )


def load_records(source: Source, encoding: str = "utf-8") -> List[CityRecord]:
    """
    Lê o dataset inteiro e retorna os registros na ordem do arquivo.

    Levanta LoadError se o arquivo não puder ser aberto.
    """
    try:
        handle = open(source, "r", encoding=encoding, errors="replace")
    except OSError as exc:
        raise LoadError(source, exc.strerror or str(exc)) from exc

    records: List[CityRecord] = []
    with handle:
        for line in handle:
            record = parse_line(line)
            if record is not None:
                records.append(record)

    logger.info("Loaded %d cities from %s", len(records), source)
    return records
