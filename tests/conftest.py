"""Shared fixtures: a small GeoNames-format dataset and the index built from it."""

import pytest
from fastapi.testclient import TestClient

from gazetteer.db.index import get_index, load_index
from gazetteer.main import app


def make_row(geonameid, name, asciiname, alternatenames, lat, lon, population, timezone):
    """Build one 19-column GeoNames line."""
    fields = [
        str(geonameid), name, asciiname, alternatenames, str(lat), str(lon),
        "P", "PPLA", "RU", "", "48", "", "", "",
        str(population), "", "144", timezone, "2024-01-01",
    ]
    return "\t".join(fields)


ROWS = [
    make_row(524901, "Москва", "Moscow", "Moscow,Moskva,Москва", 55.75222, 37.61556, 10381222, "Europe/Moscow"),
    make_row(498817, "Санкт-Петербург", "Saint Petersburg", "Saint Petersburg,Питер,Petersburg",
             59.93863, 30.31413, 5351935, "Europe/Moscow"),
    "garbage\tline\twith\tfew\tfields",
    make_row(1486209, "Екатеринбург", "Yekaterinburg", "Ekaterinburg,Yekaterinburg",
             56.8519, 60.6122, 1349772, "Asia/Yekaterinburg"),
    make_row(525404, "Мосальск", "Mosalsk", "Mosalsk", 54.4939, 34.9794, 4000, "Europe/Moscow"),
    make_row(1463433, "Зеленоград", "Zelenograd", "Zelenograd,Москва-Зеленоград",
             55.9825, 37.1814, 250000, "Europe/Moscow"),
    make_row(526480, "Мостовской", "Mostovskoy", "", 44.4133, 40.7961, 25000, "Europe/Moscow"),
    make_row(484972, "Троицк", "Troitsk", "Troitsk", 55.4844, 37.3073, 60000, "Europe/Moscow"),
    make_row(1489209, "Троицк", "Troitsk", "Troitsk", 54.0979, 61.5773, 75000, "Asia/Yekaterinburg"),
    make_row(999001, "Старовилль", "Starovill", "", 60.0, 30.0, 100, "Europe/Moscow"),
    make_row(1496747, "Новосибирск", "Novosibirsk", "Novosibirsk,Ново-Сибирск",
             55.0415, 82.9346, 1612833, "Asia/Novosibirsk"),
    # same id as Старовилль: this later row replaces it in place
    make_row(999001, "Бадвилль", "Badville", "Badville", 60.0, 30.0, 100, "Mars/Olympus"),
    make_row(2000001, "Нулевск", "Nulevsk", "", "not-a-lat", "x", "n/a", "Europe/Moscow"),
]

# geonameids in file order, after dropping the malformed line; the repeated id keeps its first position
EXPECTED_IDS = [
    "524901", "498817", "1486209", "525404", "1463433", "526480",
    "484972", "1489209", "999001", "1496747", "2000001",
]


@pytest.fixture
def dataset_path(tmp_path):
    path = tmp_path / "RU.txt"
    path.write_text("\n".join(ROWS) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def index(dataset_path):
    return load_index(dataset_path)


@pytest.fixture
def client(index):
    """Test client with the fixture index injected in place of the startup load."""
    app.dependency_overrides[get_index] = lambda: index
    yield TestClient(app)
    app.dependency_overrides.clear()
