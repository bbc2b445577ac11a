"""Main session loop and the command/read surface for view collaborators."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from greenhouse_sim.core.clock import TimeClock
from greenhouse_sim.core.config import (
    DEFAULT_FRAME_DELTA,
    FERTILIZER_ITEM,
    SECONDS_PER_GAME_HOUR,
    SEEDS_FILE,
    STARTING_MONEY,
    UPGRADES_FILE,
    WATER_CAN_ITEM,
)
from greenhouse_sim.core.context import GameContext, RandomSource
from greenhouse_sim.core.outcome import ErrorKind, Outcome
from greenhouse_sim.economy.catalog import Catalog
from greenhouse_sim.economy.shop import Shop
from greenhouse_sim.simulation.metrics import MetricsCollector
from greenhouse_sim.simulation.notifications import NotificationTimer
from greenhouse_sim.simulation.quests import Quest, QuestEngine
from greenhouse_sim.viz.logger import SimLogger
from greenhouse_sim.world.market import MarketEntity


@dataclass
class TickResult:
    day_ended: bool
    quest_activity: bool


class GreenhouseEngine:
    """Orchestrates one greenhouse session.

    Every mutation goes through the command methods below; each returns an
    Outcome and a failed command leaves state untouched.
    """

    def __init__(
        self,
        seed: int = 42,
        catalog: Optional[Catalog] = None,
        rng: Optional[RandomSource] = None,
        logger: Optional[SimLogger] = None,
        quests: Optional[list[Quest]] = None,
        money: float = STARTING_MONEY,
        seconds_per_game_hour: float = SECONDS_PER_GAME_HOUR,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.catalog = catalog if catalog is not None else Catalog()
        self.ctx = GameContext.create(
            catalog=self.catalog,
            rng=self.rng,
            logger=logger or SimLogger(),
            clock=TimeClock(seconds_per_game_hour),
            money=money,
        )
        self.quests = QuestEngine(self.ctx, quests)
        self.shop = Shop(self.ctx)
        self.notification = NotificationTimer()
        self.metrics = MetricsCollector()

        # Dashboard callback (set externally)
        self._dashboard_callback = None

    # -- convenience accessors ------------------------------------------

    @property
    def logger(self) -> SimLogger:
        return self.ctx.logger

    @logger.setter
    def logger(self, logger: SimLogger) -> None:
        self.ctx.logger = logger

    @property
    def clock(self) -> TimeClock:
        return self.ctx.clock

    @property
    def plots(self):
        return self.ctx.plots

    @property
    def ledger(self):
        return self.ctx.ledger

    @property
    def market(self):
        return self.ctx.market

    def initialize(self, seeds_path: str = SEEDS_FILE, upgrades_path: str = UPGRADES_FILE) -> bool:
        """Load the catalog if it is not ready yet. Returns catalog readiness."""
        if not self.catalog.ready:
            self.catalog.load(seeds_path, upgrades_path)

        if self.catalog.ready:
            self.logger.log(
                SimLogger.CATALOG,
                f"Catalog ready: {len(self.catalog.seeds)} seeds, {len(self.catalog.upgrades)} upgrades",
                day=self.clock.day,
            )
        else:
            self.logger.log(
                SimLogger.CATALOG,
                f"Catalog unavailable ({self.catalog.load_error}); running with an empty catalog",
                day=self.clock.day,
            )
        self.logger.flush_day(self.clock.day)
        return self.catalog.ready

    def set_dashboard_callback(self, callback) -> None:
        """Set a callback called with (day, metrics) after every game day."""
        self._dashboard_callback = callback

    # -- stepping --------------------------------------------------------

    def advance_time(self, delta_seconds: float) -> bool:
        """Advance the clock; run one market update per elapsed day."""
        clock = self.clock
        day_ended = clock.advance(delta_seconds)
        if not day_ended:
            return False

        first_ended = clock.day - clock.days_crossed
        for ended_day in range(first_ended, clock.day):
            self.market.daily_update(ended_day)
            self.metrics.collect_daily(ended_day, self.ctx, self.quests.completed_count)
            self.logger.log(SimLogger.TIME, f"Day {ended_day} ended", day=ended_day)
            self.logger.flush_day(ended_day)
            if self._dashboard_callback:
                self._dashboard_callback(ended_day, self.metrics)
        return True

    def tick(self, delta_seconds: float = DEFAULT_FRAME_DELTA) -> TickResult:
        """One external frame: time, quests, notification timer."""
        day_ended = self.advance_time(delta_seconds)
        quest_activity = self.quests.update()
        self.notification.update(delta_seconds)
        if quest_activity:
            self.notification.trigger()
        return TickResult(day_ended=day_ended, quest_activity=quest_activity)

    def run(
        self,
        days: int,
        frame_delta: float = DEFAULT_FRAME_DELTA,
        on_frame: Optional[Callable[[GreenhouseEngine], None]] = None,
    ) -> None:
        """Tick frame by frame until `days` game days have passed."""
        if not frame_delta > 0 or not math.isfinite(frame_delta):
            raise ValueError(f"frame_delta must be a positive finite number, got {frame_delta}")
        target_day = self.clock.day + days
        while self.clock.day < target_day:
            if on_frame:
                on_frame(self)
            self.tick(frame_delta)
        self.logger.flush_day(self.clock.day)

    # -- commands --------------------------------------------------------

    def plant_seed(self, plot_id: str, seed_id: str) -> Outcome:
        return self.market.plant_seed(plot_id, seed_id)

    def plant_from_inventory(self, plot_id: str, seed_id: str) -> Outcome:
        """Plant a seed item the player owns; the item is consumed on success."""
        if self.catalog.seed(seed_id) is None:
            return self._refuse(ErrorKind.UNKNOWN_CATALOG_ENTRY, f"Cannot plant {seed_id}: not in the catalog")
        if not self.ledger.has_item(seed_id):
            return self._refuse(ErrorKind.MISSING_RESOURCE, f"Need a {seed_id} seed to plant in {plot_id}")
        outcome = self.plant_seed(plot_id, seed_id)
        if outcome:
            self.ledger.use_item(seed_id)
        return outcome

    def water_plant(self, entity_id: str) -> Outcome:
        entity = self.market.get(entity_id)
        if entity is None:
            return self._refuse(ErrorKind.NOT_FOUND, f"No plant {entity_id} to water")
        if not self.ledger.has_item(WATER_CAN_ITEM):
            return self._refuse(ErrorKind.MISSING_RESOURCE, "Need a water can to water plants", [entity.id])
        outcome = entity.water()
        if not outcome:
            return self._refuse(outcome.error, f"{entity.seed.display_name} is already well-watered", [entity.id])
        self._log_care(entity, "Watered", entity.buffs["water"])
        return outcome

    def apply_fertilizer(self, entity_id: str) -> Outcome:
        entity = self.market.get(entity_id)
        if entity is None:
            return self._refuse(ErrorKind.NOT_FOUND, f"No plant {entity_id} to fertilize")
        if not self.ledger.has_item(FERTILIZER_ITEM):
            return self._refuse(ErrorKind.MISSING_RESOURCE, "Need fertilizer to fertilize plants", [entity.id])
        if not entity.fertilize():
            return self._refuse(ErrorKind.BUFF_CAPPED, f"{entity.seed.display_name} is fully fertilized", [entity.id])
        self.ledger.use_item(FERTILIZER_ITEM)
        self._log_care(entity, "Fertilized", entity.buffs["fertilizer"])
        return Outcome.success(entity.buffs["fertilizer"])

    def sell_plant(self, entity_id: str) -> Outcome:
        entity = self.market.get(entity_id)
        if entity is None:
            return self._refuse(ErrorKind.NOT_FOUND, f"No plant {entity_id} to sell")
        amount = self.ledger.sell_plant(entity)
        self.metrics.record_sale(amount)
        return Outcome.success(amount)

    def buy_item(self, item_id: str, price: float) -> Outcome:
        outcome = self.ledger.buy_item(item_id, price)
        if outcome:
            self.metrics.record_purchase()
        return outcome

    def buy_upgrade(self, upgrade_id: str, cost: float) -> Outcome:
        outcome = self.ledger.buy_upgrade(upgrade_id, cost)
        if outcome:
            self.metrics.record_upgrade()
        return outcome

    def shop_buy(self, item_id: str) -> Outcome:
        """Buy one item at its listed price."""
        outcome = self.shop.buy(item_id)
        if outcome:
            self.metrics.record_purchase()
        return outcome

    def shop_buy_upgrade(self, upgrade_id: str) -> Outcome:
        """Buy one level of an upgrade at its catalog cost."""
        outcome = self.shop.buy_upgrade(upgrade_id)
        if outcome:
            self.metrics.record_upgrade()
        return outcome

    # -- read surface ----------------------------------------------------

    @property
    def money(self) -> float:
        return self.ledger.money

    @property
    def day(self) -> int:
        return self.clock.day

    @property
    def hour(self) -> int:
        return self.clock.hour

    @property
    def day_progress(self) -> float:
        """Fraction of the current game day already elapsed, in [0, 1)."""
        return self.clock.day_fraction

    def seconds_until_day_end(self) -> float:
        return self.clock.seconds_until_day_end()

    def plot_states(self) -> list[dict]:
        return self.plots.states()

    def entity(self, entity_id: str) -> Optional[MarketEntity]:
        return self.market.get(entity_id)

    def entity_view(self, entity_id: str) -> Optional[dict]:
        entity = self.market.get(entity_id)
        if entity is None:
            return None
        return {
            "id": entity.id,
            "seed": entity.seed.id,
            "name": entity.seed.display_name,
            "plot": entity.plot.id,
            "price": entity.current_price,
            "percent_change": entity.percent_change,
            "history": entity.price_history,
            "growth_stage": entity.growth_stage,
            "buffs": dict(entity.buffs),
            "sellable": entity.is_sellable,
            "days_planted": entity.days_planted,
        }

    def quest_list(self) -> list[dict]:
        return self.quests.status_rows()

    def upgrade_levels(self) -> dict[str, int]:
        return self.ledger.upgrade_levels

    def _log_care(self, entity: MarketEntity, verb: str, buff: float) -> None:
        self.logger.log(
            SimLogger.ECONOMY,
            f"{verb} {entity.seed.display_name} ({entity.id}). Buff: {buff:g}",
            entity_ids=[entity.id],
            day=self.clock.day,
        )

    def _refuse(self, error: ErrorKind, message: str, entity_ids: Optional[list[str]] = None) -> Outcome:
        self.logger.log(SimLogger.ECONOMY, message, entity_ids=entity_ids, day=self.clock.day, error=error.name)
        return Outcome.failure(error)
