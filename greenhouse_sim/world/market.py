"""Market entities: planted seeds whose price evolves once per game day."""

from __future__ import annotations

import math
from collections import deque
from typing import Optional

from greenhouse_sim.core.config import (
    BASE_WATER_DECAY,
    EFFECT_FERTILIZER_QUALITY,
    EFFECT_REDUCE_WATER_DECAY,
    FERTILIZER_DECAY,
    FERTILIZER_UNIT_BONUS,
    GROWTH_STAGES,
    MAX_BUFF,
    PRICE_HISTORY_LENGTH,
    RANDOM_WALK_MAGNITUDE,
    SELLABLE_GROWTH_STAGE,
    WATER_UNIT_BONUS,
)
from greenhouse_sim.core.outcome import ErrorKind, Outcome
from greenhouse_sim.economy.catalog import SeedDefinition
from greenhouse_sim.viz.logger import SimLogger


def growth_stage_for(price: float, min_price: float, max_price: float) -> int:
    """Growth tier 0-4 from where price sits inside [min_price, max_price]."""
    normalized = (price - min_price) / (max_price - min_price)
    stage = math.floor(normalized * GROWTH_STAGES)
    return max(0, min(GROWTH_STAGES - 1, stage))


class MarketEntity:
    """A single planted seed on a plot.

    Prices move by a daily percentage: base growth, a random walk and
    care buffs. The price is clamped to the seed's [min_price, max_price].
    """

    def __init__(self, entity_id: str, plot: "Plot", seed: SeedDefinition) -> None:  # noqa: F821
        self.id = entity_id
        self.plot = plot
        self.seed = seed
        self.current_price: float = seed.base_price
        self._history: deque[float] = deque([seed.base_price], maxlen=PRICE_HISTORY_LENGTH)
        self.growth_stage: int = 0
        self.buffs: dict[str, float] = {"water": 0.0, "fertilizer": 0.0}
        self.days_planted: int = 0

    @property
    def price_history(self) -> list[float]:
        """Oldest first, newest last, at most PRICE_HISTORY_LENGTH points."""
        return list(self._history)

    @property
    def percent_change(self) -> float:
        """Change against the seed's base price, in percent."""
        return (self.current_price - self.seed.base_price) / self.seed.base_price * 100

    @property
    def is_sellable(self) -> bool:
        return self.growth_stage >= SELLABLE_GROWTH_STAGE

    def water(self) -> Outcome:
        if self.buffs["water"] >= MAX_BUFF:
            return Outcome.failure(ErrorKind.BUFF_CAPPED)
        self.buffs["water"] = min(MAX_BUFF, self.buffs["water"] + 1)
        return Outcome.success(self.buffs["water"])

    def fertilize(self) -> Outcome:
        if self.buffs["fertilizer"] >= MAX_BUFF:
            return Outcome.failure(ErrorKind.BUFF_CAPPED)
        self.buffs["fertilizer"] = min(MAX_BUFF, self.buffs["fertilizer"] + 1)
        return Outcome.success(self.buffs["fertilizer"])

    def daily_update(
        self,
        rng: "RandomSource",  # noqa: F821
        fertilizer_quality: float = 0.0,
        water_decay_reduction: float = 0.0,
    ) -> float:
        """Advance one game day. Returns the day's delta in percentage points.

        fertilizer_quality and water_decay_reduction are the summed
        value * level of the matching upgrades.
        """
        random_delta = float(rng.uniform(-RANDOM_WALK_MAGNITUDE, RANDOM_WALK_MAGNITUDE))

        if fertilizer_quality > 0:
            fertilizer_bonus = self.buffs["fertilizer"] * FERTILIZER_UNIT_BONUS * (1 + fertilizer_quality)
        else:
            fertilizer_bonus = self.buffs["fertilizer"] * FERTILIZER_UNIT_BONUS
        water_bonus = self.buffs["water"] * WATER_UNIT_BONUS

        delta = self.seed.base_growth_rate + random_delta + fertilizer_bonus + water_bonus

        new_price = self.current_price * (1 + delta / 100)
        self.current_price = max(self.seed.min_price, min(self.seed.max_price, new_price))
        self._history.append(self.current_price)

        self.growth_stage = growth_stage_for(self.current_price, self.seed.min_price, self.seed.max_price)

        # Buffs wear off
        water_decay = max(0.0, BASE_WATER_DECAY - water_decay_reduction)
        self.buffs["water"] = max(0.0, self.buffs["water"] - water_decay)
        self.buffs["fertilizer"] = max(0.0, self.buffs["fertilizer"] - FERTILIZER_DECAY)

        self.days_planted += 1
        return delta


class MarketBook:
    """The live collection of market entities."""

    def __init__(self, ctx: "GameContext") -> None:  # noqa: F821
        self._ctx = ctx
        self.entities: list[MarketEntity] = []
        self._next_entity_id: int = 1

    def get(self, entity_id: str) -> Optional[MarketEntity]:
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        return None

    def __len__(self) -> int:
        return len(self.entities)

    def plant_seed(self, plot_id: str, seed_id: str) -> Outcome:
        """Create an entity on a plot. Value on success is the new entity id."""
        seed = self._ctx.catalog.seed(seed_id)
        if seed is None:
            self._log(f"Cannot plant {seed_id}: not in the catalog")
            return Outcome.failure(ErrorKind.UNKNOWN_CATALOG_ENTRY)

        plot = self._ctx.plots.get(plot_id)
        if plot is None or not plot.can_plant():
            self._log(f"Cannot plant {seed.display_name} in {plot_id}: plot is locked, occupied or missing")
            return Outcome.failure(ErrorKind.INVALID_PLOT)

        entity = MarketEntity(f"plant_{self._next_entity_id}", plot, seed)
        attached = self._ctx.plots.plant(plot_id, entity)
        if not attached:
            return attached
        self._next_entity_id += 1
        self.entities.append(entity)
        self._log(f"Planted {seed.display_name} in {plot_id}", [entity.id], price=entity.current_price)
        return Outcome.success(entity.id)

    def remove(self, entity: MarketEntity) -> bool:
        if entity in self.entities:
            self.entities.remove(entity)
            return True
        return False

    def daily_update(self, day: Optional[int] = None) -> None:
        """Update every live entity for one elapsed day.

        `day` is the game day that just ended; log entries are stamped
        with it. Defaults to the clock's current day.
        """
        if day is None:
            day = self._ctx.clock.day
        ledger = self._ctx.ledger
        fertilizer_quality = ledger.effect_bonus(EFFECT_FERTILIZER_QUALITY)
        water_decay_reduction = ledger.effect_bonus(EFFECT_REDUCE_WATER_DECAY)
        for entity in self.entities:
            delta = entity.daily_update(self._ctx.rng, fertilizer_quality, water_decay_reduction)
            self._ctx.logger.log(
                SimLogger.MARKET,
                f"{entity.seed.display_name} ({entity.id}) {delta:+.2f}% -> ${entity.current_price:.2f}",
                entity_ids=[entity.id],
                day=day,
                price=entity.current_price,
                stage=entity.growth_stage,
            )

    def portfolio_value(self) -> float:
        return sum(e.current_price for e in self.entities)

    def average_price(self) -> float:
        if not self.entities:
            return 0.0
        return self.portfolio_value() / len(self.entities)

    def sellable(self) -> list[MarketEntity]:
        return [e for e in self.entities if e.is_sellable]

    def _log(self, message: str, entity_ids: Optional[list[str]] = None, **data) -> None:
        self._ctx.logger.log(SimLogger.ECONOMY, message, entity_ids=entity_ids, day=self._ctx.clock.day, **data)
