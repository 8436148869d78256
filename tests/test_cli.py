import json
import os

import pytest

from habit_tracker import cli

from conftest import NOW


def scripted(answers):
    """input() stand-in that replays answers, then behaves like Ctrl-D."""
    pending = list(answers)

    def fake_input(prompt=""):
        if not pending:
            raise EOFError
        return pending.pop(0)

    return fake_input


def run(tracker, answers):
    lines = []
    cli.run_menu(tracker, input_fn=scripted(answers), out=lines.append)
    return "\n".join(lines)


def test_add_complete_and_stats(tracker, data_file):
    output = run(tracker, ["5", "Exercise", "3", "6", "1", "6", "1", "8", "0"])

    assert 'Habit "Exercise" added with a target of 3x/week.' in output
    assert output.count('Habit "Exercise" marked complete for today.') == 2
    assert "Total completed this week  : 1" in output
    assert output.endswith("Goodbye! Keep your habits going.")

    assert len(tracker.habits[0].completions) == 1
    with open(data_file, encoding="utf-8") as f:
        assert json.load(f)["habits"][0]["name"] == "Exercise"


def test_invalid_habit_number_is_a_warning(tracker):
    output = run(tracker, ["5", "Read", "", "6", "abc", "7", "4", "0"])

    assert output.count(cli.INVALID_NUMBER) == 2
    assert len(tracker.habits) == 1
    assert tracker.habits[0].target_frequency == 7
    assert tracker.habits[0].completions == []


def test_complete_and_delete_without_habits(tracker):
    output = run(tracker, ["6", "7", "0"])
    assert "No habits to mark complete yet." in output
    assert "No habits to delete yet." in output


def test_delete_habit(tracker):
    output = run(tracker, ["5", "Read", "2", "7", "1", "2", "0"])
    assert 'Habit "Read" deleted.' in output
    assert tracker.habits == []
    assert "No habits match this filter yet." in output


def test_views_and_unknown_choice(tracker):
    output = run(tracker, ["1", "3", "4", "9", "42", "0"])
    assert "USER PROFILE" in output
    assert "ACTIVE HABITS" in output
    assert "COMPLETED HABITS" in output
    assert "No habits to show yet." in output
    assert "Invalid choice, please try again." in output


def test_end_of_input_saves_and_exits(tracker, data_file):
    output = run(tracker, [])
    assert "Goodbye!" in output
    assert os.path.exists(data_file)


@pytest.fixture
def env(tmp_path, monkeypatch):
    monkeypatch.setenv("HABIT_TRACKER_DATA_FILE", str(tmp_path / "habits.json"))
    monkeypatch.setenv("HABIT_TRACKER_LOG_FILE", str(tmp_path / "logs" / "tracker.log"))
    monkeypatch.delenv("HABIT_TRACKER_REMINDER_SECONDS", raising=False)
    monkeypatch.delenv("HABIT_TRACKER_LOG_LEVEL", raising=False)
    return tmp_path


def test_main_runs_menu_and_saves(env, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", scripted(["5", "Walk", "4", "0"]))

    assert cli.main(["--no-reminder"]) == 0

    out = capsys.readouterr().out
    assert "WELCOME TO HABIT TRACKER" in out
    assert "Tip: add a new habit" in out
    with open(env / "habits.json", encoding="utf-8") as f:
        assert json.load(f)["habits"][0]["targetFrequency"] == 4
    assert (env / "logs" / "tracker.log").exists()


def test_main_reports_loaded_habits(env, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", scripted(["5", "Walk", "4", "0"]))
    cli.main(["--no-reminder"])
    capsys.readouterr()

    monkeypatch.setattr("builtins.input", scripted(["0"]))
    assert cli.main(["--no-reminder"]) == 0
    assert "Loaded 1 habit(s)." in capsys.readouterr().out


def test_main_data_file_option_wins(env, monkeypatch):
    target = env / "other.json"
    monkeypatch.setattr("builtins.input", scripted(["0"]))
    assert cli.main(["--no-reminder", "--data-file", str(target)]) == 0
    assert target.exists()
    assert not (env / "habits.json").exists()


def test_main_with_bad_settings_exits_with_error(env, monkeypatch, capsys):
    monkeypatch.setenv("HABIT_TRACKER_REMINDER_SECONDS", "soon")
    assert cli.main([]) == 1
    assert "Could not start the habit tracker" in capsys.readouterr().err


def test_main_survives_unexpected_errors(env, monkeypatch):
    def boom(prompt=""):
        raise RuntimeError("terminal went away")

    monkeypatch.setattr("builtins.input", boom)
    assert cli.main(["--no-reminder"]) == 0


def test_clock_is_injected(tracker):
    assert tracker.clock() == NOW


def test_habit_number_with_trailing_zero_decimal(tracker):
    output = run(tracker, ["5", "Read", "2", "6", "1.0", "0"])
    assert 'Habit "Read" marked complete for today.' in output
    assert cli.INVALID_NUMBER not in output
    assert tracker.habits[0].completions == [NOW]
