from greenhouse_sim.core.outcome import ErrorKind
from greenhouse_sim.world.plots import PlotRegistry


def test_only_first_plot_unlocked_at_start(ctx):
    plots = ctx.plots
    assert [p.id for p in plots.unlocked()] == ["plot_1"]
    assert plots.max_plots == 1
    first = plots.get("plot_1")
    assert first.interactive and not first.occupied


def test_set_max_plots_overrides_individual_unlocks(ctx):
    plots = ctx.plots
    assert plots.unlock_plot("plot_5") is True
    plots.set_max_plots(3)
    assert [p.id for p in plots.unlocked()] == ["plot_1", "plot_2", "plot_3"]
    assert plots.get("plot_5").locked
    assert not plots.get("plot_5").interactive


def test_unlock_plot_is_idempotent(ctx):
    plots = ctx.plots
    assert plots.unlock_plot("plot_2") is True
    assert plots.unlock_plot("plot_2") is False
    assert plots.unlock_plot("plot_1") is False
    assert plots.unlock_plot("nowhere") is False


def test_plant_rejects_locked_occupied_and_missing(ctx):
    plots = ctx.plots
    marker = object()
    assert plots.plant("plot_2", marker).error == ErrorKind.INVALID_PLOT
    assert plots.plant("plot_42", marker).error == ErrorKind.INVALID_PLOT
    assert plots.plant("plot_1", marker).ok
    assert plots.get("plot_1").occupied
    assert plots.plant("plot_1", object()).error == ErrorKind.INVALID_PLOT
    assert plots.get("plot_1").plant is marker


def test_detach_frees_plot(ctx):
    plots = ctx.plots
    plots.plant("plot_1", object())
    plots.detach("plot_1")
    assert not plots.get("plot_1").occupied
    assert [p.id for p in plots.free_plots()] == ["plot_1"]


def test_custom_plot_ids(ctx):
    registry = PlotRegistry(ctx, plot_ids=["a", "b"], max_plots=2)
    assert [p.id for p in registry.unlocked()] == ["a", "b"]


def test_states_view(ctx):
    states = ctx.plots.states()
    assert len(states) == 9
    assert states[0] == {
        "id": "plot_1",
        "locked": False,
        "interactive": True,
        "occupied": False,
        "plant_id": None,
    }
    assert states[1]["locked"] is True
