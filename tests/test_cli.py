"""CLI tests using the Typer test runner."""

import json

from typer.testing import CliRunner

from cmdpal import __version__
from cmdpal.main import app

runner = CliRunner()


def invoke_json(*args):
    result = runner.invoke(app, [*args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "Usage:" in result.stdout
        assert "query" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_verbose_and_quiet_conflict(self):
        result = runner.invoke(app, ["--verbose", "--quiet", "version"])
        assert result.exit_code == 1

    def test_invalid_command(self):
        result = runner.invoke(app, ["nonexistent-command"])
        assert result.exit_code != 0


class TestQueryCommand:
    def test_ranked_json(self):
        results = invoke_json("query", "crop")

        assert [r["id"] for r in results[:2]] == ["tool_cropTool", "tool_perspectiveCropTool"]
        assert results[0]["highlighted"].startswith("<strong>C</strong>")
        assert len(results) <= 9

    def test_empty_query_shows_startup(self):
        results = invoke_json("query", "")
        assert [r["id"] for r in results] == ["builtin_about"]

    def test_type_option(self):
        results = invoke_json("query", "crop", "--type", "builtin")
        assert all(r["type"] == "builtin" for r in results)

    def test_unknown_type_option(self):
        result = runner.invoke(app, ["query", "crop", "--type", "widget"])
        assert result.exit_code != 0

    def test_table_output(self):
        result = runner.invoke(app, ["query", "crop"])

        assert result.exit_code == 0
        assert "Crop" in result.stdout

    def test_no_results(self):
        result = runner.invoke(app, ["query", "qqqqqq"])

        assert result.exit_code == 0
        assert "No matching commands" in result.stdout

    def test_menus_file(self, tmp_path):
        menus = tmp_path / "menus.json"
        menus.write_text(
            json.dumps(
                {"submenu": [{"title": "&Image", "submenu": [{"title": "Crop", "kind": "item", "command": 300}]}]}
            )
        )

        result = runner.invoke(app, ["--menus", str(menus), "query", "crop", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)[0]["id"] == "menu_300"

    def test_unreadable_menus_file(self, tmp_path):
        result = runner.invoke(app, ["--menus", str(tmp_path / "missing.json"), "query", "crop"])

        assert result.exit_code == 1
        assert "Configuration error" in result.stdout


class TestSelectCommand:
    def test_selection_latches_query(self):
        result = runner.invoke(app, ["select", "tool_perspectiveCropTool", "--query", "crop"])
        assert result.exit_code == 0, result.output
        assert "Recorded" in result.stdout

        results = invoke_json("query", "crop")
        assert results[0]["id"] == "tool_perspectiveCropTool"

    def test_type_token_stripped_from_recorded_query(self):
        result = runner.invoke(app, ["select", "tool_cropTool", "--query", "#tool crop"])
        assert result.exit_code == 0, result.output

        stats = invoke_json("stats")
        assert stats["queryLatch"] == {"crop": "tool_cropTool"}
        history = invoke_json("history")
        assert history[0]["query"] == "crop"

    def test_unknown_command(self):
        result = runner.invoke(app, ["select", "tool_nope"])

        assert result.exit_code == 1
        assert "Command not found" in result.stdout

    def test_reload_not_recorded(self):
        result = runner.invoke(app, ["select", "builtin_reload"])

        assert result.exit_code == 0
        assert "not recorded" in result.stdout
        assert invoke_json("history") == []


class TestHistoryCommands:
    def test_history_lists_newest_first(self):
        runner.invoke(app, ["select", "tool_cropTool", "-q", "crop"])
        runner.invoke(app, ["select", "tool_zoomTool", "-q", "zoom"])

        events = invoke_json("history")

        assert [e["commandID"] for e in events] == ["tool_zoomTool", "tool_cropTool"]
        assert events[0]["query"] == "zoom"

    def test_history_limit(self):
        for _ in range(3):
            runner.invoke(app, ["select", "tool_cropTool"])
        assert len(invoke_json("history", "--limit", "2")) == 2

    def test_empty_history_table(self):
        result = runner.invoke(app, ["history"])

        assert result.exit_code == 0
        assert "History is empty" in result.stdout

    def test_clear(self):
        runner.invoke(app, ["select", "tool_cropTool", "-q", "crop"])

        result = runner.invoke(app, ["history", "clear", "--yes"])

        assert result.exit_code == 0
        assert "History cleared" in result.stdout
        assert invoke_json("history") == []

    def test_clear_aborted(self):
        runner.invoke(app, ["select", "tool_cropTool"])

        result = runner.invoke(app, ["history", "clear"], input="n\n")

        assert result.exit_code == 0
        assert len(invoke_json("history")) == 1

    def test_stats(self):
        runner.invoke(app, ["select", "tool_cropTool", "-q", "crop"])
        runner.invoke(app, ["select", "tool_cropTool", "-q", "crop"])

        stats = invoke_json("stats")

        assert stats["occurrenceCount"] == {"tool_cropTool": 2}
        assert stats["queryLatch"] == {"crop": "tool_cropTool"}

    def test_stats_empty(self):
        result = runner.invoke(app, ["stats"])
        assert "No history yet" in result.stdout


class TestPreferenceCommands:
    def test_hide_and_unhide(self):
        result = runner.invoke(app, ["hide", "tool_cropTool"])
        assert result.exit_code == 0, result.output

        assert "tool_cropTool" not in [r["id"] for r in invoke_json("query", "crop")]
        hidden = invoke_json("query", "crop", "--include-hidden")
        assert "tool_cropTool" in [r["id"] for r in hidden]

        result = runner.invoke(app, ["unhide", "tool_cropTool"])
        assert result.exit_code == 0
        assert invoke_json("query", "crop")[0]["id"] == "tool_cropTool"

    def test_hide_unknown_command(self):
        result = runner.invoke(app, ["hide", "tool_nope"])
        assert result.exit_code == 1

    def test_hide_twice(self):
        runner.invoke(app, ["hide", "tool_cropTool"])
        result = runner.invoke(app, ["hide", "tool_cropTool"])
        assert "already hidden" in result.stdout

    def test_startup_add_list_remove(self):
        command_id = "tool_zoomTool"
        result = runner.invoke(app, ["startup", "add", command_id])
        assert result.exit_code == 0, result.output
        assert invoke_json("startup", "list") == ["builtin_about", command_id]

        # Without history the startup view keeps registration order
        startup = [r["id"] for r in invoke_json("query", "")]
        assert startup == [command_id, "builtin_about"]

        result = runner.invoke(app, ["startup", "remove", "builtin_about"])
        assert result.exit_code == 0
        assert invoke_json("startup", "list") == [command_id]


class TestCommandsCommand:
    def test_lists_registry(self):
        commands = invoke_json("commands", "--type", "builtin")

        assert {c["id"] for c in commands} >= {"builtin_about", "builtin_reload"}
        assert all(c["type"] == "builtin" for c in commands)

    def test_table(self):
        result = runner.invoke(app, ["commands"])
        assert result.exit_code == 0
        assert "Commands" in result.stdout
