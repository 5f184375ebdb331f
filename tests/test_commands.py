import json

from resellerhub.commands import init_db_command, stats_command
from resellerhub.constants import Collection


def test_init_db_recreates_tables(app, store, make_order):
    make_order()
    runner = app.test_cli_runner()
    result = runner.invoke(init_db_command)
    assert result.exit_code == 0
    assert "Initialized the database." in result.output
    assert store.query(Collection.ORDERS) == []


def test_stats_prints_both_sections(app, make_order):
    make_order()
    runner = app.test_cli_runner()
    result = runner.invoke(stats_command)
    assert result.exit_code == 0

    orders_part, shipments_part = result.output.split("Shipments:")
    orders = json.loads(orders_part.replace("Orders:", "", 1))
    assert orders["total"] == 1
    assert json.loads(shipments_part)["total"] == 0
