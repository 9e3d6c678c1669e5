import json

from scheduly.cli import main


def test_evening_plan_text(capsys):
    assert main(["evening", "23:30", "--cards", "10"]) == 0

    out = capsys.readouterr().out
    assert "Sleep Priority: arrived at 23:30" in out
    assert "23:30-00:00" in out
    assert "00:30-08:00" in out
    assert "Active Listening" not in out


def test_evening_plan_marks_optional_blocks(capsys):
    assert main(["evening", "20:00"]) == 0

    out = capsys.readouterr().out
    assert "Long Session" in out
    assert "Passive Listening [PASSIVE_LISTENING] (optional)" in out


def test_morning_plan_json(capsys):
    assert main(["--json", "morning"]) == 0

    blocks = json.loads(capsys.readouterr().out)
    assert [b["id"] for b in blocks] == [
        "wake-hydrate",
        "breakfast",
        "morning-study",
        "prep-leave",
    ]
    assert blocks[2]["duration_minutes"] == 85
    assert blocks[0]["start"] == {"time": {"hour": 8, "minute": 0}, "day_offset": 0}


def test_policy_file_overrides_defaults(tmp_path, capsys):
    path = tmp_path / "policy.json"
    overrides = {"wake_up_target": "07:00", "study_block_start": "07:30"}
    path.write_text(json.dumps(overrides))

    assert main(["--policy", str(path), "morning"]) == 0
    assert capsys.readouterr().out.startswith("07:00-07:15")


def test_bad_arrival_is_reported(capsys):
    assert main(["evening", "half past"]) == 2
    assert "ERROR" in capsys.readouterr().err


def test_out_of_range_cards_are_reported(capsys):
    assert main(["evening", "21:00", "--cards", "500"]) == 2
    assert "500" in capsys.readouterr().err
