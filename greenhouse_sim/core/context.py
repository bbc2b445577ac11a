"""Shared service handle passed to every simulation component."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from greenhouse_sim.core.clock import TimeClock
from greenhouse_sim.economy.catalog import Catalog
from greenhouse_sim.viz.logger import SimLogger


class RandomSource(Protocol):
    """Anything that can draw a uniform float in [low, high).

    numpy.random.Generator satisfies this.
    """

    def uniform(self, low: float, high: float) -> float: ...


@dataclass
class GameContext:
    """References to the components of one session.

    Components reach each other only through this handle and only via
    their public methods.
    """

    catalog: Catalog
    rng: RandomSource
    logger: SimLogger = field(default_factory=SimLogger.silent)
    clock: TimeClock = field(default_factory=TimeClock)
    plots: Optional["PlotRegistry"] = None  # noqa: F821
    ledger: Optional["EconomyLedger"] = None  # noqa: F821
    market: Optional["MarketBook"] = None  # noqa: F821

    @classmethod
    def create(
        cls,
        catalog: Catalog,
        rng: RandomSource,
        logger: Optional[SimLogger] = None,
        clock: Optional[TimeClock] = None,
        **ledger_kwargs,
    ) -> GameContext:
        """Build a context with plots, ledger and market wired in."""
        from greenhouse_sim.economy.ledger import EconomyLedger
        from greenhouse_sim.world.market import MarketBook
        from greenhouse_sim.world.plots import PlotRegistry

        ctx = cls(
            catalog=catalog,
            rng=rng,
            logger=logger or SimLogger.silent(),
            clock=clock or TimeClock(),
        )
        ctx.plots = PlotRegistry(ctx)
        ctx.ledger = EconomyLedger(ctx, **ledger_kwargs)
        ctx.market = MarketBook(ctx)
        return ctx
