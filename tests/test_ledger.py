import pytest

from greenhouse_sim.core.outcome import ErrorKind


def test_buy_item_deducts_money_and_adds_stock(ctx):
    ledger = ctx.ledger
    assert ledger.money == 101
    outcome = ledger.buy_item("fertilizer", 10)
    assert outcome.ok
    assert ledger.money == 91
    assert ledger.inventory["fertilizer"] == 1


def test_buy_item_insufficient_funds_changes_nothing(ctx):
    ledger = ctx.ledger
    outcome = ledger.buy_item("TSLA", 500)
    assert outcome.error == ErrorKind.INSUFFICIENT_FUNDS
    assert ledger.money == 101
    assert ledger.count("TSLA") == 0


def test_use_item_fails_at_zero(ctx):
    ledger = ctx.ledger
    assert ledger.use_item("fertilizer") is False
    ledger.add_item("fertilizer", 2)
    assert ledger.use_item("fertilizer") is True
    assert ledger.count("fertilizer") == 1
    assert ledger.has_item("fertilizer")


def test_add_money_counts_towards_total_earned(ctx):
    ledger = ctx.ledger
    ledger.add_money(50)
    assert ledger.money == 151
    assert ledger.total_earned == 50
    with pytest.raises(ValueError):
        ledger.add_money(-1)


def test_buy_upgrade_unknown_id(ctx):
    outcome = ctx.ledger.buy_upgrade("time_machine", 1)
    assert outcome.error == ErrorKind.UNKNOWN_CATALOG_ENTRY
    assert ctx.ledger.money == 101


def test_buy_upgrade_insufficient_funds_checked_before_prerequisite(ctx):
    outcome = ctx.ledger.buy_upgrade("greenhouse_expansion_2", 400)
    assert outcome.error == ErrorKind.INSUFFICIENT_FUNDS


def test_buy_upgrade_with_unmet_prerequisite_changes_nothing(ctx):
    ledger = ctx.ledger
    ledger.money = 500
    outcome = ledger.buy_upgrade("greenhouse_expansion_2", 400)
    assert outcome.error == ErrorKind.PREREQUISITE_UNMET
    assert ledger.money == 500
    assert ledger.upgrade_level("greenhouse_expansion_2") == 0


def test_plot_capacity_upgrade_applies_immediately(ctx):
    ledger = ctx.ledger
    ledger.money = 1000
    assert ledger.buy_upgrade("greenhouse_expansion_1", 150).value == 1
    assert ctx.plots.max_plots == 3
    assert [p.id for p in ctx.plots.unlocked()] == ["plot_1", "plot_2", "plot_3"]
    assert ledger.buy_upgrade("greenhouse_expansion_2", 400).ok
    assert ctx.plots.max_plots == 5
    assert ledger.money == 450


def test_levels_are_cumulative_and_feed_effect_bonus(ctx):
    ledger = ctx.ledger
    ledger.money = 1000
    ledger.buy_upgrade("water_can_upgrade_1", 80)
    ledger.buy_upgrade("water_can_upgrade_1", 80)
    assert ledger.upgrade_level("water_can_upgrade_1") == 2
    assert ledger.effect_bonus("reduce_water_decay") == pytest.approx(1.0)
    assert ledger.effect_bonus("increase_fertilizer_quality") == 0
    assert ledger.upgrade_levels == {
        "greenhouse_expansion_1": 0,
        "greenhouse_expansion_2": 0,
        "fertilizer_quality_1": 0,
        "water_can_upgrade_1": 2,
    }


def test_sell_plant_pays_and_destroys(ctx):
    entity_id = ctx.market.plant_seed("plot_1", "AAPL").value
    entity = ctx.market.get(entity_id)
    entity.current_price = 30.0
    amount = ctx.ledger.sell_plant(entity)
    assert amount == 30.0
    assert ctx.ledger.money == 131
    assert ctx.ledger.total_earned == 30
    plot = ctx.plots.get("plot_1")
    assert plot.plant is None and not plot.occupied
    assert ctx.market.get(entity_id) is None
