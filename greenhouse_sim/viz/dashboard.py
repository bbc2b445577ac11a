"""Real-time matplotlib dashboard and static session charts."""

from __future__ import annotations

import os

import matplotlib
matplotlib.use("TkAgg")  # Use interactive backend
import matplotlib.pyplot as plt
import numpy as np

from greenhouse_sim.core.config import DASHBOARD_UPDATE_INTERVAL, PRICE_CHART_POINTS

UP_COLOR = "#00cc00"
DOWN_COLOR = "#ff0000"


class Dashboard:
    """Real-time dashboard with 4 subplots updating during the session."""

    def __init__(self) -> None:
        self._initialized = False
        self._fig = None
        self._axes = None
        self._update_counter = 0

    def initialize(self) -> None:
        """Set up the matplotlib figure and subplots."""
        plt.ion()
        self._fig, axes = plt.subplots(2, 2, figsize=(12, 8))
        self._fig.suptitle("Greenhouse Market Dashboard", fontsize=14)
        self._axes = {
            "money": axes[0, 0],
            "portfolio": axes[0, 1],
            "price": axes[1, 0],
            "plants": axes[1, 1],
        }
        for ax in axes.flat:
            ax.grid(True, alpha=0.3)

        self._axes["money"].set_title("Money & Total Earned")
        self._axes["portfolio"].set_title("Portfolio Value")
        self._axes["price"].set_title("Average Plant Price")
        self._axes["plants"].set_title("Live Plants / Plot Capacity")

        plt.tight_layout()
        self._initialized = True
        plt.pause(0.01)

    def update(self, day: int, metrics: "MetricsCollector") -> None:  # noqa: F821
        """Update the dashboard with latest metrics."""
        self._update_counter += 1
        if self._update_counter % DASHBOARD_UPDATE_INTERVAL != 0:
            return

        if not self._initialized:
            self.initialize()

        snapshots = metrics.snapshots
        if not snapshots:
            return

        days = [s.day for s in snapshots]

        ax = self._axes["money"]
        ax.clear()
        ax.set_title("Money & Total Earned")
        ax.plot(days, [s.money for s in snapshots], "g-", linewidth=1.5, label="Money")
        ax.plot(days, [s.total_earned for s in snapshots], "b--", linewidth=1, label="Total earned")
        ax.legend(fontsize=8)
        ax.grid(True, alpha=0.3)

        ax = self._axes["portfolio"]
        ax.clear()
        ax.set_title("Portfolio Value")
        ax.plot(days, [s.portfolio_value for s in snapshots], "m-", linewidth=1.5)
        ax.grid(True, alpha=0.3)

        ax = self._axes["price"]
        ax.clear()
        ax.set_title("Average Plant Price")
        ax.plot(days, [s.avg_price for s in snapshots], "c-", linewidth=1.5)
        ax.grid(True, alpha=0.3)

        ax = self._axes["plants"]
        ax.clear()
        ax.set_title("Live Plants / Plot Capacity")
        ax.step(days, [s.live_plants for s in snapshots], "b-", where="post", label="Plants")
        ax.step(days, [s.max_plots for s in snapshots], "r--", where="post", label="Capacity")
        ax.legend(fontsize=8)
        ax.grid(True, alpha=0.3)

        self._fig.suptitle(f"Greenhouse Market - Day {day}", fontsize=14)
        plt.tight_layout()
        plt.pause(0.01)

    def save(self, filepath: str) -> None:
        """Save the current dashboard as an image."""
        if self._fig:
            self._fig.savefig(filepath, dpi=150, bbox_inches="tight")

    def close(self) -> None:
        """Close the dashboard."""
        if self._fig:
            plt.close(self._fig)

    # ------------------------------------------------------------------
    # Post-hoc static plots
    # ------------------------------------------------------------------

    @staticmethod
    def price_history_chart(market: "MarketBook", filepath: str) -> None:  # noqa: F821
        """Mini stock graph per live plant: last N prices, green up, red down."""
        entities = market.entities
        if not entities:
            return

        fig, axes = plt.subplots(1, len(entities), figsize=(3 * len(entities), 3), squeeze=False)
        for ax, entity in zip(axes[0], entities):
            points = np.array(entity.price_history[-PRICE_CHART_POINTS:])
            low, high = points.min(), points.max()
            spread = high - low
            heights = (points - low) / spread if spread > 0 else np.full(len(points), 0.5)
            heights = 0.1 + heights * 0.8
            rising = np.concatenate(([False], np.diff(points) >= 0))
            colors = [UP_COLOR if up else DOWN_COLOR for up in rising]
            ax.bar(np.arange(len(points)), heights, color=colors, width=0.7)
            ax.set_title(
                f"{entity.seed.display_name}: ${entity.current_price:.2f} ({entity.percent_change:+.2f}%)",
                fontsize=8,
            )
            ax.set_xticks([])
            ax.set_yticks([])
        fig.tight_layout()
        fig.savefig(filepath, dpi=150)
        plt.close(fig)

    @staticmethod
    def comprehensive_report(metrics: "MetricsCollector", output_dir: str) -> None:  # noqa: F821
        """Generate all plots and save to output directory."""
        os.makedirs(output_dir, exist_ok=True)

        snapshots = metrics.snapshots
        if not snapshots:
            return

        days = [s.day for s in snapshots]

        # Money over time
        fig, ax = plt.subplots(figsize=(10, 5))
        ax.plot(days, [s.money for s in snapshots], label="Money")
        ax.plot(days, metrics.net_worth, label="Net worth")
        ax.set_title("Money and Net Worth Over Time")
        ax.set_xlabel("Day")
        ax.set_ylabel("Dollars")
        ax.legend(fontsize=8)
        ax.grid(True, alpha=0.3)
        fig.savefig(os.path.join(output_dir, "money.png"), dpi=150)
        plt.close(fig)

        # Average price
        fig, ax = plt.subplots(figsize=(10, 5))
        ax.plot(days, [s.avg_price for s in snapshots])
        ax.set_title("Average Plant Price Over Time")
        ax.set_xlabel("Day")
        ax.set_ylabel("Dollars")
        ax.grid(True, alpha=0.3)
        fig.savefig(os.path.join(output_dir, "avg_price.png"), dpi=150)
        plt.close(fig)

        # Sales volume
        fig, ax = plt.subplots(figsize=(10, 5))
        ax.bar(days, [s.sale_revenue for s in snapshots], color="c")
        ax.set_title("Sale Revenue per Day")
        ax.set_xlabel("Day")
        ax.set_ylabel("Dollars")
        ax.grid(True, alpha=0.3)
        fig.savefig(os.path.join(output_dir, "sales.png"), dpi=150)
        plt.close(fig)

        print(f"Reports saved to {output_dir}/")
