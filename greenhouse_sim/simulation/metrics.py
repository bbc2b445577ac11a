"""Per-day data collection, statistics and export."""

from __future__ import annotations

import csv
import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class DailySnapshot:
    """A snapshot of session state at the end of one game day."""

    day: int = 0
    money: float = 0.0
    total_earned: float = 0.0
    live_plants: int = 0
    avg_price: float = 0.0
    portfolio_value: float = 0.0
    max_plots: int = 0
    quests_completed: int = 0
    plants_sold: int = 0
    sale_revenue: float = 0.0
    items_bought: int = 0
    upgrades_bought: int = 0
    prices: dict[str, float] = field(default_factory=dict)


class MetricsCollector:
    """Collects time-series data every game day."""

    def __init__(self) -> None:
        self.snapshots: list[DailySnapshot] = []
        self._daily_sales: int = 0
        self._daily_revenue: float = 0.0
        self._daily_items: int = 0
        self._daily_upgrades: int = 0

    def record_sale(self, amount: float) -> None:
        self._daily_sales += 1
        self._daily_revenue += amount

    def record_purchase(self) -> None:
        self._daily_items += 1

    def record_upgrade(self) -> None:
        self._daily_upgrades += 1

    def collect_daily(
        self,
        day: int,
        ctx: "GameContext",  # noqa: F821
        quests_completed: int = 0,
    ) -> DailySnapshot:
        """Collect all metrics for this day."""
        market = ctx.market
        snapshot = DailySnapshot(
            day=day,
            money=ctx.ledger.money,
            total_earned=ctx.ledger.total_earned,
            live_plants=len(market),
            avg_price=market.average_price(),
            portfolio_value=market.portfolio_value(),
            max_plots=ctx.plots.max_plots,
            quests_completed=quests_completed,
            plants_sold=self._daily_sales,
            sale_revenue=self._daily_revenue,
            items_bought=self._daily_items,
            upgrades_bought=self._daily_upgrades,
            prices={e.id: e.current_price for e in market.entities},
        )
        self.snapshots.append(snapshot)

        # Reset daily counters
        self._daily_sales = 0
        self._daily_revenue = 0.0
        self._daily_items = 0
        self._daily_upgrades = 0

        return snapshot

    @property
    def net_worth(self) -> list[float]:
        return [s.money + s.portfolio_value for s in self.snapshots]

    def export_csv(self, filepath: str) -> None:
        """Export all snapshots to CSV."""
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow([
                "day", "money", "total_earned", "live_plants", "avg_price",
                "portfolio_value", "max_plots", "quests_completed",
                "plants_sold", "sale_revenue", "items_bought", "upgrades_bought",
            ])
            for s in self.snapshots:
                writer.writerow([
                    s.day, f"{s.money:.2f}", f"{s.total_earned:.2f}",
                    s.live_plants, f"{s.avg_price:.2f}",
                    f"{s.portfolio_value:.2f}", s.max_plots, s.quests_completed,
                    s.plants_sold, f"{s.sale_revenue:.2f}",
                    s.items_bought, s.upgrades_bought,
                ])

    def summary_report(self, start_day: int = 0, end_day: Optional[int] = None) -> str:
        """Generate a human-readable summary of the session period."""
        relevant = [
            s for s in self.snapshots
            if s.day >= start_day and (end_day is None or s.day <= end_day)
        ]
        if not relevant:
            return "No data available for the specified period."

        first = relevant[0]
        last = relevant[-1]
        total_sales = sum(s.plants_sold for s in relevant)
        total_revenue = sum(s.sale_revenue for s in relevant)
        total_items = sum(s.items_bought for s in relevant)
        total_upgrades = sum(s.upgrades_bought for s in relevant)
        best = max(relevant, key=lambda s: s.money + s.portfolio_value)

        lines = [
            f"=== Session Summary: Day {first.day} to Day {last.day} ===",
            f"Duration: {last.day - first.day + 1} days",
            f"",
            f"Money: ${first.money:.2f} -> ${last.money:.2f}",
            f"  Total earned: ${last.total_earned:.2f}",
            f"  Peak net worth: ${best.money + best.portfolio_value:.2f} (day {best.day})",
            f"",
            f"Trading:",
            f"  Plants sold: {total_sales}",
            f"  Sale revenue: ${total_revenue:.2f}",
            f"  Avg sale: ${total_revenue / max(1, total_sales):.2f}",
            f"  Items bought: {total_items}",
            f"  Upgrades bought: {total_upgrades}",
            f"",
            f"Final State:",
            f"  Live plants: {last.live_plants} (avg ${last.avg_price:.2f})",
            f"  Portfolio value: ${last.portfolio_value:.2f}",
            f"  Plot capacity: {last.max_plots}",
            f"  Quests completed: {last.quests_completed}",
        ]
        return "\n".join(lines)
