import asyncio
import json

import pytest

from services.car_models import CarModelsClient, model_names
from services.catalog import get_cars, load_cars
from services.errors import CatalogError, UpstreamError


def test_load_cars_accepts_wrapped_and_bare_documents(tmp_path):
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"cars": [{"brand": "Kia", "model": "EV6"}]}))
    bare = tmp_path / "bare.json"
    bare.write_text(json.dumps([{"brand": "Kia", "model": "Soul"}, "junk"]))

    assert load_cars(str(wrapped)) == [{"brand": "Kia", "model": "EV6"}]
    assert load_cars(str(bare)) == [{"brand": "Kia", "model": "Soul"}]


def test_missing_or_broken_catalog(tmp_path):
    with pytest.raises(CatalogError):
        load_cars(str(tmp_path / "nope.json"))
    broken = tmp_path / "broken.json"
    broken.write_text("{")
    with pytest.raises(CatalogError):
        load_cars(str(broken))
    odd = tmp_path / "odd.json"
    odd.write_text(json.dumps({"vehicles": []}))
    with pytest.raises(CatalogError):
        load_cars(str(odd))


def test_shipped_catalog_loads_off_thread():
    from services.config import Settings
    cars = asyncio.run(get_cars(Settings().catalog_path))
    assert cars
    assert all({"brand", "model", "year", "price"} <= set(c) for c in cars)


def test_model_names():
    payload = [{"model": "model 3"}, {"model": " model y "}, {"make": "tesla"}, "x"]
    assert model_names(payload) == ["model 3", "model y"]
    with pytest.raises(UpstreamError):
        model_names({"error": "bad key"})


def test_car_models_without_key_fails_before_network():
    with pytest.raises(UpstreamError):
        asyncio.run(CarModelsClient(api_key="").models("Tesla"))
