"""Entry point for a headless greenhouse market session."""

from __future__ import annotations

import argparse
import os
import time

from greenhouse_sim.core.config import SEEDS_FILE, UPGRADES_FILE


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Greenhouse Market Simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--days", type=int, default=30, help="Number of game days to play")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility")
    parser.add_argument("--frame-delta", type=float, default=0.25, help="Real seconds per simulated frame")
    parser.add_argument("--verbosity", type=int, default=0, choices=[0, 1, 2, 3], help="Log verbosity level")
    parser.add_argument("--output-dir", type=str, default="results", help="Output directory for results")
    parser.add_argument("--no-dashboard", action="store_true", help="Disable real-time dashboard")
    parser.add_argument("--log-file", type=str, default=None, help="Path to log file")
    parser.add_argument("--seeds-file", type=str, default=SEEDS_FILE, help="Seed catalog JSON")
    parser.add_argument("--upgrades-file", type=str, default=UPGRADES_FILE, help="Upgrade catalog JSON")

    args = parser.parse_args()

    # Import here to allow --help without loading everything
    from greenhouse_sim.agents.autoplayer import AutoPlayer
    from greenhouse_sim.simulation.engine import GreenhouseEngine
    from greenhouse_sim.viz.logger import SimLogger

    print(f"=== Greenhouse Market Simulation ===")
    print(f"Days: {args.days} | Seed: {args.seed} | Frame delta: {args.frame_delta}s")
    print(f"Output: {args.output_dir}")
    print()

    engine = GreenhouseEngine(
        seed=args.seed,
        logger=SimLogger(
            verbosity=args.verbosity,
            log_file=args.log_file or os.path.join(args.output_dir, "session.log"),
            stdout=(args.verbosity > 0),
        ),
    )

    print("Loading catalog...")
    if engine.initialize(args.seeds_file, args.upgrades_file):
        print(f"  Seeds    : {', '.join(engine.catalog.seed_ids)}")
        print(f"  Upgrades : {len(engine.catalog.upgrades)}")
    else:
        print(f"  Catalog unavailable ({engine.catalog.load_error}); every purchase will be refused")
    print()

    dashboard = None
    if not args.no_dashboard:
        try:
            from greenhouse_sim.viz.dashboard import Dashboard
            dashboard = Dashboard()
            dashboard.initialize()
            engine.set_dashboard_callback(lambda day, metrics: dashboard.update(day, metrics))
            print("Real-time dashboard enabled")
        except Exception as e:
            print(f"Dashboard unavailable ({e}), continuing without visualization")
            dashboard = None

    player = AutoPlayer(engine.rng)

    print(f"Playing {args.days} days...")
    t0 = time.time()
    try:
        engine.run(args.days, frame_delta=args.frame_delta, on_frame=player)
    except KeyboardInterrupt:
        print("\nSession interrupted by user")

    elapsed = time.time() - t0
    print(f"\nSession complete: day {engine.day}, {engine.day_progress:.0%} through the day, reached in {elapsed:.2f}s")

    os.makedirs(args.output_dir, exist_ok=True)

    csv_path = os.path.join(args.output_dir, "metrics.csv")
    engine.metrics.export_csv(csv_path)
    print(f"Metrics exported to {csv_path}")

    try:
        from greenhouse_sim.viz.dashboard import Dashboard as DashClass
        DashClass.comprehensive_report(engine.metrics, args.output_dir)
        DashClass.price_history_chart(engine.market, os.path.join(args.output_dir, "price_history.png"))
    except Exception as e:
        print(f"Could not generate plots: {e}")

    print()
    print(engine.metrics.summary_report())
    print()
    print("Quests:")
    for row in engine.quest_list():
        print(f"  [{row['status']:<9}] {row['description']}")

    if dashboard:
        dashboard.save(os.path.join(args.output_dir, "dashboard_final.png"))
        dashboard.close()

    engine.logger.export_json(os.path.join(args.output_dir, "events.json"))
    engine.logger.close()

    print(f"\nAll results saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
