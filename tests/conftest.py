import pytest

from greenhouse_sim.core.context import GameContext
from greenhouse_sim.economy.catalog import Catalog
from greenhouse_sim.simulation.engine import GreenhouseEngine
from greenhouse_sim.viz.logger import SimLogger

SEED_RECORDS = [
    {"id": "AAPL", "displayName": "Apple", "basePrice": 10, "minPrice": 5,
     "maxPrice": 50, "baseGrowthRate": 2, "rarity": "common"},
    {"id": "TSLA", "displayName": "Tesla", "basePrice": 25, "minPrice": 10,
     "maxPrice": 150, "baseGrowthRate": 1.5, "rarity": "rare"},
]

UPGRADE_RECORDS = [
    {"id": "greenhouse_expansion_1", "name": "Greenhouse Expansion", "description": "",
     "cost": 150, "effect": {"type": "increase_max_plots", "value": 2}},
    {"id": "greenhouse_expansion_2", "name": "Greenhouse Expansion II", "description": "",
     "cost": 400, "prerequisite": "greenhouse_expansion_1",
     "effect": {"type": "increase_max_plots", "value": 2}},
    {"id": "fertilizer_quality_1", "name": "Premium Fertilizer", "description": "",
     "cost": 120, "effect": {"type": "increase_fertilizer_quality", "value": 0.5}},
    {"id": "water_can_upgrade_1", "name": "Insulated Watering Can", "description": "",
     "cost": 80, "effect": {"type": "reduce_water_decay", "value": 0.5}},
]


class FixedDraw:
    """Random source stub: every uniform() draw returns the same value."""

    def __init__(self, value=0.0):
        self.value = value
        self.calls = []

    def uniform(self, low, high):
        self.calls.append((low, high))
        return self.value


@pytest.fixture
def catalog():
    return Catalog.from_records(SEED_RECORDS, UPGRADE_RECORDS)


@pytest.fixture
def rng():
    return FixedDraw(0.0)


@pytest.fixture
def ctx(catalog, rng):
    return GameContext.create(catalog, rng)


@pytest.fixture
def engine(catalog, rng):
    return GreenhouseEngine(catalog=catalog, rng=rng, logger=SimLogger.silent())
