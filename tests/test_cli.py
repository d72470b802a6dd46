"""
End-to-end tests for the tasktracker CLI.

Each test runs the CLI in a subprocess with TASKTRACKER_DATA_DIR pointed at a
fresh temp directory, so state carries over between calls within a test
but never between tests.
"""

import json


def test_default_launches_repl(run_cli):
    """Running without a command starts the REPL."""
    result = run_cli(input="exit\n")

    assert result.returncode == 0, result.stderr
    assert "Task Tracker REPL" in result.stdout
    assert "Goodbye!" in result.stdout


def test_repl_commands_from_stdin(run_cli):
    result = run_cli("repl", input='add "Buy milk" --due today\nls\nexit\n')

    assert result.returncode == 0, result.stderr
    assert "Buy milk" in result.stdout
    assert "Today" in result.stdout


def test_version(run_cli):
    result = run_cli("version")

    assert result.returncode == 0
    assert "Task Tracker v1.0.0" in result.stdout


def test_add_json_output(run_cli):
    result = run_cli("add", "Buy milk", "--due", "2030-01-02 18:00", "--json")

    assert result.returncode == 0, result.stderr
    data = json.loads(result.stdout)
    assert data["title"] == "Buy milk"
    assert data["dueDate"] == "2030-01-02T18:00:00"
    assert data["isCompleted"] is False
    assert data["groupId"] is None


def test_add_empty_title_fails(run_cli):
    result = run_cli("add", "")

    assert result.returncode == 1
    assert "cannot be empty" in result.stderr


def test_add_bad_due_date_fails(run_cli):
    result = run_cli("add", "Buy milk", "--due", "someday")

    assert result.returncode == 1
    assert "Invalid due date" in result.stderr


def test_ls_sections_json(run_cli):
    run_cli("add", "Future", "--due", "2099-01-01")
    run_cli("add", "Past", "--due", "2000-01-01")
    run_cli("add", "Undated")

    result = run_cli("ls", "--json")

    data = json.loads(result.stdout)
    assert [s["section"] for s in data] == ["Upcoming", "Overdue"]
    assert data[0]["tasks"][0]["title"] == "Future"
    assert data[1]["tasks"][0]["title"] == "Past"


def test_ls_all_includes_undated(run_cli):
    run_cli("add", "Undated")
    run_cli("add", "Dated", "--due", "2099-01-01")

    result = run_cli("ls", "--all", "--json")

    assert [t["title"] for t in json.loads(result.stdout)] == ["Dated", "Undated"]


def test_done_toggles_and_persists(run_cli):
    run_cli("add", "Buy milk", "--due", "2099-01-01")

    first = run_cli("done", "1", "--json")
    second = run_cli("done", "1", "--json")

    assert json.loads(first.stdout)[0]["isCompleted"] is True
    assert json.loads(second.stdout)[0]["isCompleted"] is False


def test_rm_by_position_uses_displayed_order(run_cli):
    run_cli("add", "C", "--due", "2099-03-01")
    run_cli("add", "A", "--due", "2099-01-01")
    run_cli("add", "B", "--due", "2099-02-01")

    result = run_cli("rm", "1,3", "--yes", "--json")

    assert result.returncode == 0, result.stderr
    assert sorted(t["title"] for t in json.loads(result.stdout)) == ["A", "C"]
    remaining = json.loads(run_cli("ls", "--all", "--json").stdout)
    assert [t["title"] for t in remaining] == ["B"]


def test_rm_unknown_reference_fails(run_cli):
    result = run_cli("rm", "zzz", "--yes")

    assert result.returncode == 1
    assert "Task zzz not found" in result.stderr


def test_edit_keeps_due_date_unless_told(run_cli):
    run_cli("add", "Old", "--due", "2099-01-01 10:00")

    kept = json.loads(run_cli("edit", "1", "New", "--json").stdout)
    cleared = json.loads(run_cli("edit", "1", "Newer", "--no-due", "--json").stdout)

    assert kept["title"] == "New"
    assert kept["dueDate"] == "2099-01-01T10:00:00"
    assert cleared["dueDate"] is None


def test_edit_rejects_conflicting_flags(run_cli):
    run_cli("add", "Old", "--due", "2099-01-01")

    result = run_cli("edit", "1", "New", "--due", "tomorrow", "--no-due")

    assert result.returncode == 1


def test_show_by_id_prefix(run_cli):
    task = json.loads(run_cli("add", "Someday", "--json").stdout)

    result = run_cli("show", task["id"][:8], "--raw")

    assert result.returncode == 0, result.stderr
    assert f"Task {task['id']}" in result.stdout
    assert "Due: -" in result.stdout


def test_remind_delivers_due_reminders_once(run_cli):
    run_cli("add", "Pay rent", "--due", "2000-01-01")
    run_cli("add", "Later", "--due", "2099-01-01")

    first = run_cli("remind", "--raw")
    second = run_cli("remind", "--raw")
    pending = run_cli("remind", "--pending", "--json")

    assert "Don't forget to Pay rent!" in first.stdout
    assert second.stdout.strip() == ""
    assert [r["body"] for r in json.loads(pending.stdout)] == ["Don't forget to Later!"]
