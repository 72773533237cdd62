"""
Command line entry points.
"""

import json
from unittest.mock import patch

import pytest

from excusegen import cli


@pytest.fixture
def store_path(tmp_path):
    return str(tmp_path / "device.db")


def test_pick_prints_matching_excuse(capsys):
    assert cli.main(["pick", "Late to work", "--tone", "Absurd", "--length", "short"]) == 0
    out = capsys.readouterr().out
    assert "raccoon" in out
    assert "Tone: Absurd" in out


def test_pick_unknown_situation_fails(capsys):
    assert cli.main(["pick", "Why I'm single"]) == 1
    assert "No local excuses" in capsys.readouterr().out


def test_stats_json(capsys):
    assert cli.main(["stats", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["totalSituations"] == 3
    assert data["totalExcuses"] == sum(data["excusesBySituation"].values())


def test_favorites_flow(store_path, capsys):
    assert cli.main(["favorites", "--store", store_path, "add", "My alarm died."]) == 0
    assert cli.main(["favorites", "--store", store_path, "add", "My alarm died."]) == 0
    assert "Already in favorites" in capsys.readouterr().out

    assert cli.main(["favorites", "--store", store_path, "list"]) == 0
    listing = capsys.readouterr().out
    assert "My alarm died." in listing
    short_id = listing.split()[0]

    assert cli.main(["favorites", "--store", store_path, "remove", short_id]) == 0
    assert cli.main(["favorites", "--store", store_path, "remove", short_id]) == 1

    cli.main(["favorites", "--store", store_path, "add", "a"])
    cli.main(["favorites", "--store", store_path, "add", "b"])
    capsys.readouterr()
    assert cli.main(["favorites", "--store", store_path, "clear"]) == 0
    assert "Cleared 2 favorites" in capsys.readouterr().out


def test_favorites_limit(store_path, capsys):
    with patch("excusegen.core.config.MAX_FAVORITES", 1):
        assert cli.main(["favorites", "--store", store_path, "add", "one"]) == 0
        assert cli.main(["favorites", "--store", store_path, "add", "two"]) == 1
    assert "limit of 1 reached" in capsys.readouterr().out


def test_rate(store_path, capsys):
    assert cli.main(["rate", "Great excuse", "5", "--store", store_path]) == 0
    assert cli.main(["rate", "Great excuse", "9", "--store", store_path]) == 1
    assert "between 1 and 5" in capsys.readouterr().out


def test_device_id_is_stable(store_path, capsys):
    cli.main(["device-id", "--store", store_path])
    cli.main(["device-id", "--store", store_path])
    first, second = capsys.readouterr().out.split()
    assert first == second


def test_serve_runs_uvicorn():
    with patch("uvicorn.run") as mock_run:
        assert cli.main(["serve", "--port", "9000"]) == 0

    mock_run.assert_called_once_with("excusegen.api.main:app", host="127.0.0.1", port=9000, reload=False)
