import json

from greenhouse_sim.viz.logger import SimLogger


def test_flush_respects_verbosity(capsys):
    logger = SimLogger(verbosity=1)
    logger.log(SimLogger.QUEST, "Quest completed", day=2)
    logger.log(SimLogger.MARKET, "Apple +2.00%", day=2)
    logger.flush_day(2)
    out = capsys.readouterr().out
    assert "Quest completed" in out
    assert "Apple" not in out
    assert len(logger.entries) == 2


def test_silent_logger_still_records(capsys):
    logger = SimLogger.silent()
    logger.log(SimLogger.CATALOG, "Catalog ready")
    logger.flush_day(0)
    assert capsys.readouterr().out == ""
    assert logger.entries[0].message == "Catalog ready"


def test_narrative_and_json_export(tmp_path):
    logger = SimLogger.silent()
    assert logger.get_narrative(1) == "Day 1: Nothing notable happened."
    logger.log(SimLogger.ECONOMY, "Sold Apple", entity_ids=["plant_1"], day=1, amount=12.5)
    assert "[ECONOMY] Sold Apple" in logger.get_narrative(1)

    path = tmp_path / "events.json"
    logger.export_json(str(path))
    data = json.loads(path.read_text())
    assert data == [{
        "day": 1, "category": "ECONOMY", "message": "Sold Apple",
        "entity_ids": ["plant_1"], "data": {"amount": 12.5},
    }]


def test_log_file(tmp_path):
    path = tmp_path / "logs" / "session.log"
    logger = SimLogger(verbosity=0, log_file=str(path), stdout=False)
    logger.log(SimLogger.PLOT, "Unlocked plot_2", day=3)
    logger.flush_day(3)
    logger.close()
    assert "[PLOT    ] Unlocked plot_2" in path.read_text()


def test_entries_for_filters_category_and_entity():
    logger = SimLogger.silent()
    logger.log(SimLogger.ECONOMY, "Watered Apple", entity_ids=["plant_1"], day=1)
    logger.log(SimLogger.ECONOMY, "Bought fertilizer", day=1)
    logger.log(SimLogger.MARKET, "Apple +2.00%", entity_ids=["plant_1"], day=1)
    assert [e.message for e in logger.entries_for(SimLogger.ECONOMY)] == ["Watered Apple", "Bought fertilizer"]
    assert len(logger.entries_for(entity_id="plant_1")) == 2
