"""Shop counter: priced item listings and upgrade offers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from greenhouse_sim.core.config import (
    FERTILIZER_ITEM,
    FERTILIZER_PRICE,
    WATER_CAN_ITEM,
    WATER_CAN_MAX_OWNED,
    WATER_CAN_PRICE,
)
from greenhouse_sim.core.outcome import ErrorKind, Outcome
from greenhouse_sim.viz.logger import SimLogger


@dataclass
class Listing:
    """A purchasable item as shown at the counter."""

    item_id: str
    name: str
    price: float
    owned: int = 0
    max_owned: Optional[int] = None
    purchasable: bool = False


@dataclass
class UpgradeOffer:
    upgrade_id: str
    name: str
    description: str
    cost: float
    level: int
    purchased: bool
    affordable: bool
    prerequisite_met: bool

    @property
    def available(self) -> bool:
        return not self.purchased and self.affordable and self.prerequisite_met


class Shop:
    """Resolves prices for the ledger's buy commands."""

    def __init__(self, ctx: "GameContext") -> None:  # noqa: F821
        self._ctx = ctx

    def _base_listings(self) -> list[Listing]:
        listings = [
            Listing(item_id=seed.id, name=f"{seed.display_name} Seed", price=seed.base_price)
            for seed in self._ctx.catalog.seeds
        ]
        listings.append(Listing(item_id=FERTILIZER_ITEM, name="Fertilizer", price=FERTILIZER_PRICE))
        listings.append(
            Listing(
                item_id=WATER_CAN_ITEM,
                name="Water Can",
                price=WATER_CAN_PRICE,
                max_owned=WATER_CAN_MAX_OWNED,
            )
        )
        return listings

    def listings(self) -> list[Listing]:
        """Current listings with owned counts and purchasability."""
        ledger = self._ctx.ledger
        result = self._base_listings()
        for listing in result:
            listing.owned = ledger.count(listing.item_id)
            under_limit = listing.max_owned is None or listing.owned < listing.max_owned
            listing.purchasable = ledger.money >= listing.price and under_limit
        return result

    def listing(self, item_id: str) -> Optional[Listing]:
        for listing in self.listings():
            if listing.item_id == item_id:
                return listing
        return None

    def buy(self, item_id: str) -> Outcome:
        listing = self.listing(item_id)
        if listing is None:
            self._log(f"{item_id} is not sold here")
            return Outcome.failure(ErrorKind.UNKNOWN_CATALOG_ENTRY)
        if listing.max_owned is not None and listing.owned >= listing.max_owned:
            self._log(f"Already own {listing.owned} {listing.name}; limit is {listing.max_owned}")
            return Outcome.failure(ErrorKind.LIMIT_REACHED)
        return self._ctx.ledger.buy_item(item_id, listing.price)

    def upgrade_offers(self) -> list[UpgradeOffer]:
        ledger = self._ctx.ledger
        offers = []
        for upgrade in self._ctx.catalog.upgrades:
            level = ledger.upgrade_level(upgrade.id)
            prerequisite_met = not upgrade.prerequisite or ledger.upgrade_level(upgrade.prerequisite) > 0
            offers.append(
                UpgradeOffer(
                    upgrade_id=upgrade.id,
                    name=upgrade.name,
                    description=upgrade.description,
                    cost=upgrade.cost,
                    level=level,
                    purchased=level > 0,
                    affordable=ledger.money >= upgrade.cost,
                    prerequisite_met=prerequisite_met,
                )
            )
        return offers

    def buy_upgrade(self, upgrade_id: str) -> Outcome:
        upgrade = self._ctx.catalog.upgrade(upgrade_id)
        if upgrade is None:
            self._log(f"Upgrade {upgrade_id} not found")
            return Outcome.failure(ErrorKind.UNKNOWN_CATALOG_ENTRY)
        return self._ctx.ledger.buy_upgrade(upgrade_id, upgrade.cost)

    def _log(self, message: str) -> None:
        self._ctx.logger.log(SimLogger.ECONOMY, message, day=self._ctx.clock.day)
