"""Economy ledger: money, inventory counts and upgrade levels."""

from __future__ import annotations

from typing import Optional

from greenhouse_sim.core.config import (
    EFFECT_INCREASE_MAX_PLOTS,
    STARTING_INVENTORY,
    STARTING_MONEY,
)
from greenhouse_sim.core.outcome import ErrorKind, Outcome
from greenhouse_sim.viz.logger import SimLogger


class EconomyLedger:
    """Authorizes every purchase, sale and reward grant.

    Upgrade levels only ever increase. Effects other than plot capacity are
    read lazily by the market during its daily update.
    """

    def __init__(
        self,
        ctx: "GameContext",  # noqa: F821
        money: float = STARTING_MONEY,
        inventory: Optional[dict[str, int]] = None,
    ) -> None:
        if money < 0:
            raise ValueError("starting money must be non-negative")
        self._ctx = ctx
        self.money: float = money
        self.total_earned: float = 0.0
        self.inventory: dict[str, int] = dict(STARTING_INVENTORY if inventory is None else inventory)
        self._levels: dict[str, int] = {}

    # -- inventory -------------------------------------------------------

    def count(self, item_id: str) -> int:
        return self.inventory.get(item_id, 0)

    def has_item(self, item_id: str) -> bool:
        return self.count(item_id) > 0

    def use_item(self, item_id: str) -> bool:
        """Consume one unit. Returns False (and changes nothing) at zero."""
        if not self.has_item(item_id):
            self._log(f"No {item_id} in inventory")
            return False
        self.inventory[item_id] -= 1
        self._log(f"Used {item_id}. Remaining: {self.inventory[item_id]}", item=item_id)
        return True

    def add_item(self, item_id: str, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError("cannot add a negative item amount")
        self.inventory[item_id] = self.count(item_id) + amount
        self._log(f"Added {amount} {item_id}. New total: {self.inventory[item_id]}", item=item_id)

    def add_money(self, amount: float) -> None:
        """Grant money. Counts towards total_earned."""
        if amount < 0:
            raise ValueError("cannot grant a negative amount")
        self.money += amount
        self.total_earned += amount
        self._log(f"Added ${amount:.2f}. Money: ${self.money:.2f}", amount=amount)

    # -- purchases -------------------------------------------------------

    def buy_item(self, item_id: str, price: float) -> Outcome:
        if self.money < price:
            self._log(f"Not enough money to buy {item_id}. Need ${price:.2f}, have ${self.money:.2f}")
            return Outcome.failure(ErrorKind.INSUFFICIENT_FUNDS)
        self.money -= price
        self.inventory[item_id] = self.count(item_id) + 1
        self._log(f"Bought {item_id} for ${price:.2f}. Money: ${self.money:.2f}", item=item_id, price=price)
        return Outcome.success()

    def buy_upgrade(self, upgrade_id: str, cost: float) -> Outcome:
        upgrade = self._ctx.catalog.upgrade(upgrade_id)
        if upgrade is None:
            self._log(f"Upgrade {upgrade_id} not found")
            return Outcome.failure(ErrorKind.UNKNOWN_CATALOG_ENTRY)
        if self.money < cost:
            self._log(f"Not enough money for {upgrade.name}. Need ${cost:.2f}, have ${self.money:.2f}")
            return Outcome.failure(ErrorKind.INSUFFICIENT_FUNDS)
        if upgrade.prerequisite and self.upgrade_level(upgrade.prerequisite) == 0:
            self._log(f"Prerequisite for {upgrade.name} not met")
            return Outcome.failure(ErrorKind.PREREQUISITE_UNMET)

        self.money -= cost
        self._levels[upgrade_id] = self.upgrade_level(upgrade_id) + 1
        self._log(
            f"Bought upgrade {upgrade.name}. Level {self._levels[upgrade_id]}. Money: ${self.money:.2f}",
            upgrade=upgrade_id,
            cost=cost,
        )

        if upgrade.effect.type == EFFECT_INCREASE_MAX_PLOTS:
            plots = self._ctx.plots
            plots.set_max_plots(plots.max_plots + int(upgrade.effect.value))
        return Outcome.success(self._levels[upgrade_id])

    # -- sales -----------------------------------------------------------

    def sell_plant(self, entity: "MarketEntity") -> float:  # noqa: F821
        """Sell and destroy an entity. Returns the amount received."""
        value = entity.current_price
        self.money += value
        self.total_earned += value
        self._ctx.plots.detach(entity.plot.id)
        self._ctx.market.remove(entity)
        self._log(
            f"Sold {entity.seed.display_name} for ${value:.2f}. Money: ${self.money:.2f}",
            entity_ids=[entity.id],
            amount=value,
        )
        return value

    # -- upgrades --------------------------------------------------------

    def upgrade_level(self, upgrade_id: str) -> int:
        return self._levels.get(upgrade_id, 0)

    @property
    def upgrade_levels(self) -> dict[str, int]:
        """Level of every catalog upgrade, purchased or not."""
        return {u.id: self.upgrade_level(u.id) for u in self._ctx.catalog.upgrades}

    def effect_bonus(self, effect_type: str) -> float:
        """Sum of value * level over purchased upgrades with this effect."""
        total = 0.0
        for upgrade in self._ctx.catalog.upgrades:
            level = self.upgrade_level(upgrade.id)
            if level > 0 and upgrade.effect.type == effect_type:
                total += upgrade.effect.value * level
        return total

    def _log(self, message: str, entity_ids: Optional[list[str]] = None, **data) -> None:
        self._ctx.logger.log(
            SimLogger.ECONOMY, message, entity_ids=entity_ids, day=self._ctx.clock.day, **data
        )
