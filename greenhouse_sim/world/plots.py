"""Greenhouse plots: locked/occupied state, unlocks and capacity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from greenhouse_sim.core.config import INITIAL_MAX_PLOTS, PLOT_IDS
from greenhouse_sim.core.outcome import ErrorKind, Outcome
from greenhouse_sim.viz.logger import SimLogger


@dataclass
class Plot:
    """A fixed-identity plantable tile."""

    id: str
    index: int
    locked: bool = True
    plant: Optional["MarketEntity"] = None  # noqa: F821

    @property
    def interactive(self) -> bool:
        return not self.locked

    @property
    def occupied(self) -> bool:
        return self.plant is not None

    def can_plant(self) -> bool:
        return not self.locked and self.plant is None


class PlotRegistry:
    """Owns the fixed set of plots. Plots are never created or destroyed after init."""

    def __init__(
        self,
        ctx: "GameContext",  # noqa: F821
        plot_ids: Optional[list[str]] = None,
        max_plots: int = INITIAL_MAX_PLOTS,
    ) -> None:
        self._ctx = ctx
        self.plots: list[Plot] = [
            Plot(id=plot_id, index=i) for i, plot_id in enumerate(plot_ids or PLOT_IDS)
        ]
        self._by_id: dict[str, Plot] = {p.id: p for p in self.plots}
        self.max_plots: int = 0
        self.set_max_plots(max_plots)

    def get(self, plot_id: str) -> Optional[Plot]:
        return self._by_id.get(plot_id)

    def set_max_plots(self, count: int) -> None:
        """Unlock plots with index < count; force every other plot locked."""
        self.max_plots = count
        for plot in self.plots:
            if plot.index < count:
                if plot.locked:
                    plot.locked = False
                    self._log(f"Plot {plot.id} unlocked")
            else:
                plot.locked = True
        self._log(f"Max plots set to {count}", max_plots=count)

    def unlock_plot(self, plot_id: str) -> bool:
        """Unlock a single plot. Returns True only if it was locked before."""
        plot = self._by_id.get(plot_id)
        if plot is None or not plot.locked:
            return False
        plot.locked = False
        self._log(f"Plot {plot_id} unlocked")
        return True

    def plant(self, plot_id: str, entity: "MarketEntity") -> Outcome:  # noqa: F821
        """Attach an entity to a plot. Fails if the plot is missing, locked or occupied."""
        plot = self._by_id.get(plot_id)
        if plot is None or not plot.can_plant():
            return Outcome.failure(ErrorKind.INVALID_PLOT)
        plot.plant = entity
        return Outcome.success(plot)

    def detach(self, plot_id: str) -> None:
        plot = self._by_id.get(plot_id)
        if plot is not None:
            plot.plant = None

    def unlocked(self) -> list[Plot]:
        return [p for p in self.plots if not p.locked]

    def free_plots(self) -> list[Plot]:
        """Unlocked, unoccupied plots in index order."""
        return [p for p in self.plots if p.can_plant()]

    def states(self) -> list[dict]:
        """Per-plot lock/occupancy view for display collaborators."""
        return [
            {
                "id": p.id,
                "locked": p.locked,
                "interactive": p.interactive,
                "occupied": p.occupied,
                "plant_id": p.plant.id if p.plant is not None else None,
            }
            for p in self.plots
        ]

    def _log(self, message: str, **data) -> None:
        self._ctx.logger.log(SimLogger.PLOT, message, day=self._ctx.clock.day, **data)
