"""Seed and upgrade catalogs: immutable definitions with a load-then-ready lifecycle."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional

from greenhouse_sim.core.config import SEEDS_FILE, UPGRADE_EFFECT_TYPES, UPGRADES_FILE


@dataclass(frozen=True)
class SeedDefinition:
    """Immutable definition of a plantable market seed.

    Prices are dollars, base_growth_rate is percentage points per day.
    """

    id: str
    display_name: str
    base_price: float
    min_price: float
    max_price: float
    base_growth_rate: float
    rarity: str = "common"

    def __post_init__(self) -> None:
        if not self.min_price < self.max_price:
            raise ValueError(f"seed {self.id}: min_price must be below max_price")
        if not self.min_price <= self.base_price <= self.max_price:
            raise ValueError(f"seed {self.id}: base_price outside [min_price, max_price]")

    @classmethod
    def from_record(cls, record: dict) -> SeedDefinition:
        return cls(
            id=str(record["id"]),
            display_name=str(record["displayName"]),
            base_price=float(record["basePrice"]),
            min_price=float(record["minPrice"]),
            max_price=float(record["maxPrice"]),
            base_growth_rate=float(record["baseGrowthRate"]),
            rarity=str(record.get("rarity", "common")),
        )


@dataclass(frozen=True)
class UpgradeEffect:
    type: str
    value: float

    def __post_init__(self) -> None:
        if self.type not in UPGRADE_EFFECT_TYPES:
            raise ValueError(f"unknown upgrade effect type: {self.type}")


@dataclass(frozen=True)
class UpgradeDefinition:
    """Immutable definition of a purchasable, levelled upgrade."""

    id: str
    name: str
    description: str
    cost: float
    effect: UpgradeEffect
    prerequisite: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict) -> UpgradeDefinition:
        effect = record["effect"]
        return cls(
            id=str(record["id"]),
            name=str(record["name"]),
            description=str(record.get("description", "")),
            cost=float(record["cost"]),
            effect=UpgradeEffect(type=str(effect["type"]), value=float(effect["value"])),
            prerequisite=record.get("prerequisite") or None,
        )


class Catalog:
    """Seed and upgrade definitions.

    Starts empty and not ready. A successful load() makes it ready; a failed
    load leaves it empty so every lookup misses and dependent commands fail
    with UNKNOWN_CATALOG_ENTRY instead of working on partial data.
    """

    def __init__(self) -> None:
        self._seeds: dict[str, SeedDefinition] = {}
        self._upgrades: dict[str, UpgradeDefinition] = {}
        self.ready: bool = False
        self.load_error: Optional[str] = None

    @classmethod
    def from_records(cls, seeds: list[dict], upgrades: list[dict]) -> Catalog:
        """Build a ready catalog from in-memory records. Raises on bad records."""
        catalog = cls()
        catalog._install(seeds, upgrades)
        return catalog

    @classmethod
    def from_files(cls, seeds_path: str = SEEDS_FILE, upgrades_path: str = UPGRADES_FILE) -> Catalog:
        catalog = cls()
        catalog.load(seeds_path, upgrades_path)
        return catalog

    def load(self, seeds_path: str = SEEDS_FILE, upgrades_path: str = UPGRADES_FILE) -> bool:
        """Load both catalogs from JSON files. Returns True when ready."""
        try:
            with open(seeds_path, encoding="utf-8") as f:
                seeds = json.load(f)
            with open(upgrades_path, encoding="utf-8") as f:
                upgrades = json.load(f)
            self._install(seeds, upgrades)
        except (OSError, ValueError, KeyError, TypeError) as e:
            self._seeds = {}
            self._upgrades = {}
            self.ready = False
            self.load_error = f"{type(e).__name__}: {e}"
            return False
        self.load_error = None
        return True

    def _install(self, seeds: list[dict], upgrades: list[dict]) -> None:
        # Parse everything first so a bad record leaves the catalog untouched
        seed_defs = [SeedDefinition.from_record(r) for r in seeds]
        upgrade_defs = [UpgradeDefinition.from_record(r) for r in upgrades]
        self._seeds = {s.id: s for s in seed_defs}
        self._upgrades = {u.id: u for u in upgrade_defs}
        self.ready = True

    # -- lookups ---------------------------------------------------------

    def seed(self, seed_id: str) -> Optional[SeedDefinition]:
        if not self.ready:
            return None
        return self._seeds.get(seed_id)

    def upgrade(self, upgrade_id: str) -> Optional[UpgradeDefinition]:
        if not self.ready:
            return None
        return self._upgrades.get(upgrade_id)

    @property
    def seeds(self) -> list[SeedDefinition]:
        """Seeds in catalog order."""
        return list(self._seeds.values())

    @property
    def upgrades(self) -> list[UpgradeDefinition]:
        """Upgrades in catalog order."""
        return list(self._upgrades.values())

    @property
    def seed_ids(self) -> list[str]:
        return list(self._seeds.keys())
