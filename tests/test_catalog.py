import json

import pytest

from greenhouse_sim.core.outcome import ErrorKind
from greenhouse_sim.economy.catalog import Catalog, SeedDefinition
from greenhouse_sim.simulation.engine import GreenhouseEngine
from greenhouse_sim.viz.logger import SimLogger

from conftest import SEED_RECORDS, UPGRADE_RECORDS


def _write(tmp_path, seeds, upgrades):
    seeds_path = tmp_path / "seeds.json"
    upgrades_path = tmp_path / "upgrades.json"
    seeds_path.write_text(seeds if isinstance(seeds, str) else json.dumps(seeds), encoding="utf-8")
    upgrades_path.write_text(upgrades if isinstance(upgrades, str) else json.dumps(upgrades), encoding="utf-8")
    return str(seeds_path), str(upgrades_path)


def test_bundled_catalog_loads():
    catalog = Catalog.from_files()
    assert catalog.ready
    assert catalog.seed_ids == ["AAPL", "TSLA"]
    assert catalog.upgrade("greenhouse_expansion_2").prerequisite == "greenhouse_expansion_1"


def test_records_are_parsed(tmp_path):
    catalog = Catalog()
    assert catalog.load(*_write(tmp_path, SEED_RECORDS, UPGRADE_RECORDS)) is True
    apple = catalog.seed("AAPL")
    assert apple.display_name == "Apple"
    assert (apple.base_price, apple.min_price, apple.max_price) == (10, 5, 50)
    assert apple.base_growth_rate == 2
    upgrade = catalog.upgrade("fertilizer_quality_1")
    assert upgrade.effect.type == "increase_fertilizer_quality"
    assert upgrade.effect.value == 0.5
    assert upgrade.prerequisite is None


def test_new_catalog_is_empty_and_not_ready():
    catalog = Catalog()
    assert not catalog.ready
    assert catalog.seed("AAPL") is None
    assert catalog.seeds == [] and catalog.upgrades == []


def test_missing_file_degrades_to_empty(tmp_path):
    catalog = Catalog()
    assert catalog.load(str(tmp_path / "nope.json"), str(tmp_path / "nope2.json")) is False
    assert not catalog.ready
    assert catalog.load_error.startswith("FileNotFoundError")


def test_malformed_json_degrades_to_empty(tmp_path):
    catalog = Catalog()
    assert catalog.load(*_write(tmp_path, "[{not json", UPGRADE_RECORDS)) is False
    assert catalog.seed("AAPL") is None
    assert catalog.upgrades == []


def test_invalid_record_fails_whole_load(tmp_path):
    bad = [dict(SEED_RECORDS[0], minPrice=80)]
    catalog = Catalog()
    assert catalog.load(*_write(tmp_path, bad, UPGRADE_RECORDS)) is False
    assert not catalog.ready
    assert catalog.upgrade("greenhouse_expansion_1") is None


def test_unknown_effect_type_is_rejected(tmp_path):
    bad = [dict(UPGRADE_RECORDS[0], effect={"type": "double_money", "value": 2})]
    catalog = Catalog()
    assert catalog.load(*_write(tmp_path, SEED_RECORDS, bad)) is False


def test_seed_definition_validates_price_band():
    with pytest.raises(ValueError):
        SeedDefinition("X", "X", base_price=100, min_price=5, max_price=50, base_growth_rate=1)


def test_commands_fail_gracefully_without_catalog(tmp_path, rng):
    engine = GreenhouseEngine(rng=rng, logger=SimLogger.silent())
    assert engine.initialize(str(tmp_path / "a.json"), str(tmp_path / "b.json")) is False
    assert engine.plant_seed("plot_1", "AAPL").error == ErrorKind.UNKNOWN_CATALOG_ENTRY
    assert engine.buy_upgrade("greenhouse_expansion_1", 150).error == ErrorKind.UNKNOWN_CATALOG_ENTRY
    assert engine.shop_buy("AAPL").error == ErrorKind.UNKNOWN_CATALOG_ENTRY
    assert engine.money == 101
    assert engine.upgrade_levels() == {}


def test_catalog_can_become_ready_later(tmp_path, rng):
    engine = GreenhouseEngine(rng=rng, logger=SimLogger.silent())
    engine.initialize(str(tmp_path / "a.json"), str(tmp_path / "b.json"))
    assert engine.initialize(*_write(tmp_path, SEED_RECORDS, UPGRADE_RECORDS)) is True
    assert engine.plant_seed("plot_1", "AAPL").ok
