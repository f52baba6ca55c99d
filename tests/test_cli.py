import json
from pathlib import Path

import pytest

from quizcore import cli


@pytest.fixture()
def dirs(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *_a, **_k: None)
    banks = tmp_path / "banks"
    banks.mkdir()
    bank = {
        "categoryId": "general",
        "categoryName": "General",
        "levels": [
            {
                "levelIndex": i,
                "questions": [
                    {"id": f"g{i}-{j}", "text": "?", "choices": ["a", "b"], "correctIndex": 0} for j in range(3)
                ],
            }
            for i in (1, 2, 3)
        ],
    }
    (banks / "general.json").write_text(json.dumps(bank), encoding="utf-8")
    return banks, tmp_path / "saves"


def _run(capsys, dirs, *args):
    banks, saves = dirs
    code = cli.main(["--catalog", str(banks), "--save-dir", str(saves), *args])
    out = capsys.readouterr().out
    return code, (json.loads(out) if out.strip() else None)


def test_show_fresh_save(capsys, dirs):
    code, summary = _run(capsys, dirs, "show")
    assert code == 0
    assert summary["coins"] == 0
    general = summary["categories"]["general"]
    assert general["unlocked_level_max"] == 1
    assert [lvl["playable"] for lvl in general["levels"]] == [True, False, False]


def test_force_unlock_then_reset(capsys, dirs):
    _, summary = _run(capsys, dirs, "force-unlock", "general", "3")
    assert summary["categories"]["general"]["unlocked_level_max"] == 3

    _, summary = _run(capsys, dirs, "reset-category", "general")
    assert summary["categories"]["general"]["unlocked_level_max"] == 1


def test_add_coins_and_reset_all(capsys, dirs):
    _, summary = _run(capsys, dirs, "add-coins", "50")
    assert summary["coins"] == 50
    _, summary = _run(capsys, dirs, "add-coins", "-80")
    assert summary["coins"] == 0

    _run(capsys, dirs, "add-coins", "25")
    _, summary = _run(capsys, dirs, "reset-all")
    assert summary["coins"] == 25


def test_delete_all(capsys, dirs):
    _run(capsys, dirs, "add-coins", "10")
    _, summary = _run(capsys, dirs, "delete-all")
    assert summary["coins"] == 0


def test_missing_catalog_dir_fails(capsys, dirs, tmp_path):
    _, saves = dirs
    code = cli.main(["--catalog", str(tmp_path / "nope"), "--save-dir", str(saves), "show"])
    assert code == 2
