"""Monte Carlo analysis: run N autoplay sessions with different seeds, aggregate statistics."""

from __future__ import annotations

import csv
import os
import statistics
import time
from dataclasses import dataclass

import numpy as np

from greenhouse_sim.core.config import DEFAULT_FRAME_DELTA


@dataclass
class RunResult:
    """Summary of a single autoplay session."""
    seed: int
    final_money: float
    total_earned: float
    peak_net_worth: float
    plants_sold: int
    sale_revenue: float
    upgrades_bought: int
    quests_completed: int
    final_max_plots: int
    final_quest_day: int  # day the last quest completed, or -1
    elapsed_seconds: float


def run_single(seed: int, days: int, frame_delta: float = DEFAULT_FRAME_DELTA) -> RunResult:
    """Run one autoplay session and return its summary."""
    from greenhouse_sim.agents.autoplayer import AutoPlayer
    from greenhouse_sim.simulation.engine import GreenhouseEngine
    from greenhouse_sim.viz.logger import SimLogger

    engine = GreenhouseEngine(seed=seed, logger=SimLogger.silent())
    engine.initialize()
    player = AutoPlayer(engine.rng)

    t0 = time.time()
    engine.run(days, frame_delta=frame_delta, on_frame=player)
    elapsed = time.time() - t0

    snaps = engine.metrics.snapshots
    last = snaps[-1] if snaps else None

    final_quest_day = -1
    total_quests = len(engine.quests.quests)
    for s in snaps:
        if s.quests_completed == total_quests:
            final_quest_day = s.day
            break

    return RunResult(
        seed=seed,
        final_money=engine.money,
        total_earned=engine.ledger.total_earned,
        peak_net_worth=max(engine.metrics.net_worth) if snaps else engine.money,
        plants_sold=sum(s.plants_sold for s in snaps),
        sale_revenue=sum(s.sale_revenue for s in snaps),
        upgrades_bought=sum(s.upgrades_bought for s in snaps),
        quests_completed=engine.quests.completed_count,
        final_max_plots=last.max_plots if last else engine.plots.max_plots,
        final_quest_day=final_quest_day,
        elapsed_seconds=elapsed,
    )


def monte_carlo(
    n_runs: int = 20,
    days: int = 60,
    frame_delta: float = 0.25,
    output_dir: str = "results/monte_carlo",
) -> list[RunResult]:
    """Run N sessions with generated seeds and report aggregate stats."""

    os.makedirs(output_dir, exist_ok=True)
    results: list[RunResult] = []
    rng = np.random.default_rng(0)
    seeds = [int(s) for s in rng.integers(0, 100_000, size=n_runs)]

    print(f"=== Monte Carlo Greenhouse Sessions ===")
    print(f"Runs: {n_runs} | Days/run: {days} | Frame delta: {frame_delta}s")
    print(f"Seeds: {seeds[:5]}{'...' if n_runs > 5 else ''}")
    print()

    total_t0 = time.time()

    for i, seed in enumerate(seeds):
        result = run_single(seed, days, frame_delta)
        results.append(result)
        print(
            f"  Run {i+1:>3}/{n_runs} | seed={seed:>5} | "
            f"money=${result.final_money:>8.2f} | "
            f"earned=${result.total_earned:>8.2f} | "
            f"sold={result.plants_sold:>3} | "
            f"quests={result.quests_completed} | "
            f"{result.elapsed_seconds:.1f}s"
        )

    total_elapsed = time.time() - total_t0
    print(f"\nAll {n_runs} runs completed in {total_elapsed:.1f}s "
          f"({total_elapsed/max(1, n_runs):.1f}s avg)")

    # ── Aggregate Statistics ──────────────────────────────────────────
    print("\n" + "=" * 70)
    print("AGGREGATE RESULTS")
    print("=" * 70)

    def stat_line(label: str, values: list[float], fmt: str = ".1f") -> str:
        if not values:
            return f"  {label}: no data"
        mn = min(values)
        mx = max(values)
        avg = statistics.mean(values)
        med = statistics.median(values)
        std = statistics.stdev(values) if len(values) > 1 else 0
        return f"  {label:<30s}  mean={avg:{fmt}}  median={med:{fmt}}  std={std:{fmt}}  min={mn:{fmt}}  max={mx:{fmt}}"

    print("\nECONOMY")
    print(stat_line("Final money", [r.final_money for r in results], ".2f"))
    print(stat_line("Total earned", [r.total_earned for r in results], ".2f"))
    print(stat_line("Peak net worth", [r.peak_net_worth for r in results], ".2f"))
    print(stat_line("Plants sold", [r.plants_sold for r in results]))
    print(stat_line("Sale revenue", [r.sale_revenue for r in results], ".2f"))
    print(stat_line("Upgrades bought", [r.upgrades_bought for r in results]))
    print(stat_line("Final plot capacity", [r.final_max_plots for r in results]))

    print("\nPROGRESSION")
    print(stat_line("Quests completed", [r.quests_completed for r in results]))
    finished = [r for r in results if r.final_quest_day >= 0]
    if finished:
        finish_days = [r.final_quest_day for r in finished]
        print(f"  Chain finished: {len(finished)}/{n_runs} runs "
              f"(avg day {statistics.mean(finish_days):.0f}, "
              f"range {min(finish_days)}-{max(finish_days)})")
    else:
        print(f"  Chain finished: 0/{n_runs} runs")

    # ── Export CSV ────────────────────────────────────────────────────
    csv_path = os.path.join(output_dir, "monte_carlo_results.csv")
    with open(csv_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "seed", "final_money", "total_earned", "peak_net_worth",
            "plants_sold", "sale_revenue", "upgrades_bought",
            "quests_completed", "final_max_plots", "final_quest_day",
            "elapsed_s",
        ])
        for r in results:
            writer.writerow([
                r.seed, f"{r.final_money:.2f}", f"{r.total_earned:.2f}",
                f"{r.peak_net_worth:.2f}", r.plants_sold,
                f"{r.sale_revenue:.2f}", r.upgrades_bought,
                r.quests_completed, r.final_max_plots, r.final_quest_day,
                f"{r.elapsed_seconds:.1f}",
            ])
    print(f"\nResults exported to {csv_path}")

    return results


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Monte Carlo greenhouse sessions")
    parser.add_argument("--runs", type=int, default=20, help="Number of runs")
    parser.add_argument("--days", type=int, default=60, help="Game days per run")
    parser.add_argument("--frame-delta", type=float, default=0.25, help="Real seconds per frame")
    parser.add_argument("--output-dir", type=str, default="results/monte_carlo")
    args = parser.parse_args()

    monte_carlo(
        n_runs=args.runs,
        days=args.days,
        frame_delta=args.frame_delta,
        output_dir=args.output_dir,
    )
