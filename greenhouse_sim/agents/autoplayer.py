"""Heuristic autoplay agent for headless sessions."""

from __future__ import annotations

from typing import Optional

from numpy.random import Generator

from greenhouse_sim.core.config import (
    AUTOPLAY_CASH_RESERVE,
    AUTOPLAY_FERTILIZER_STOCK,
    AUTOPLAY_SELL_CEILING_RATIO,
    FERTILIZER_ITEM,
    MAX_BUFF,
    WATER_CAN_ITEM,
)


class AutoPlayer:
    """Plays the greenhouse through the engine's command surface.

    Each frame it works through a fixed priority list:
    1. Keep a water can
    2. Sell plants near their ceiling, or on a falling day above base price
    3. Tend live plants (water to the cap, fertilize when the buff ran out)
    4. Fill free plots with seeds
    5. Buy upgrades that leave a cash reserve
    While the starter quest is active it only assembles the starter kit.
    """

    def __init__(self, rng: Generator, reserve: float = AUTOPLAY_CASH_RESERVE) -> None:
        self._rng = rng
        self.reserve = reserve

    def __call__(self, engine: "GreenhouseEngine") -> None:  # noqa: F821
        self.act(engine)

    def act(self, engine: "GreenhouseEngine") -> None:  # noqa: F821
        if not engine.catalog.ready:
            return

        self._keep_water_can(engine)

        quest = engine.quests.active_quest
        if quest is not None and quest.id == "buy_first_seed":
            self._buy_starter_kit(engine)
            return

        self._sell(engine)
        self._tend(engine)
        self._plant(engine)
        self._buy_upgrades(engine)

    # ------------------------------------------------------------------

    def _keep_water_can(self, engine: "GreenhouseEngine") -> None:  # noqa: F821
        if not engine.ledger.has_item(WATER_CAN_ITEM):
            engine.shop_buy(WATER_CAN_ITEM)

    def _buy_starter_kit(self, engine: "GreenhouseEngine") -> None:  # noqa: F821
        ledger = engine.ledger
        if not ledger.has_item(FERTILIZER_ITEM):
            engine.shop_buy(FERTILIZER_ITEM)
        if not any(ledger.has_item(seed_id) for seed_id in engine.catalog.seed_ids):
            seed_id = self._pick_seed(engine, ledger.money)
            if seed_id is not None:
                engine.shop_buy(seed_id)

    def _sell(self, engine: "GreenhouseEngine") -> None:  # noqa: F821
        for entity in engine.market.sellable():
            seed = entity.seed
            history = entity.price_history
            near_ceiling = entity.current_price >= seed.max_price * AUTOPLAY_SELL_CEILING_RATIO
            falling = len(history) >= 2 and history[-1] < history[-2] and entity.current_price > seed.base_price
            if near_ceiling or falling:
                engine.sell_plant(entity.id)

    def _tend(self, engine: "GreenhouseEngine") -> None:  # noqa: F821
        ledger = engine.ledger
        for entity in list(engine.market.entities):
            if entity.buffs["water"] < MAX_BUFF:
                engine.water_plant(entity.id)
            if entity.buffs["fertilizer"] == 0:
                if not ledger.has_item(FERTILIZER_ITEM):
                    self._restock_fertilizer(engine)
                engine.apply_fertilizer(entity.id)

    def _restock_fertilizer(self, engine: "GreenhouseEngine") -> None:  # noqa: F821
        listing = engine.shop.listing(FERTILIZER_ITEM)
        while (
            listing is not None
            and engine.ledger.count(FERTILIZER_ITEM) < AUTOPLAY_FERTILIZER_STOCK
            and engine.money - listing.price >= self.reserve
        ):
            if not engine.shop_buy(FERTILIZER_ITEM):
                break

    def _plant(self, engine: "GreenhouseEngine") -> None:  # noqa: F821
        ledger = engine.ledger
        for plot in engine.plots.free_plots():
            owned = [s for s in engine.catalog.seed_ids if ledger.has_item(s)]
            if owned:
                seed_id: Optional[str] = owned[0]
            else:
                seed_id = self._pick_seed(engine, ledger.money)
                if seed_id is None or not engine.shop_buy(seed_id):
                    return
            engine.plant_from_inventory(plot.id, seed_id)

    def _pick_seed(self, engine: "GreenhouseEngine", budget: float) -> Optional[str]:  # noqa: F821
        affordable = [s.id for s in engine.catalog.seeds if s.base_price <= budget]
        if not affordable:
            return None
        return str(self._rng.choice(affordable))

    def _buy_upgrades(self, engine: "GreenhouseEngine") -> None:  # noqa: F821
        for offer in engine.shop.upgrade_offers():
            if offer.available and engine.money - offer.cost >= self.reserve:
                engine.shop_buy_upgrade(offer.upgrade_id)
