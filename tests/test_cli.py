"""Tests for autocommit.cli module."""

import json
from unittest.mock import MagicMock

from typer.testing import CliRunner

from autocommit import __version__
from autocommit.cli import app
from autocommit.git import GitError, RebaseExecutionError
from autocommit.llm import LLMResult, MissingAPIKeyError
from autocommit.rebase import RebasePlan
from autocommit.stage import CommitPlan


runner = CliRunner()


def _write_plan(path, data):
    path.write_text(json.dumps(data))
    return path


# ============================================================================
# Version / Default Command Tests
# ============================================================================


class TestVersion:
    """Tests for the --version flag."""

    def test_prints_version(self):
        """Test that the version is printed."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"autocommit {__version__}" in result.output


class TestDefaultCommand:
    """Tests for running without a subcommand."""

    def test_runs_commit_then_rebase(self, mocker):
        """Test that both workflows run with the same settings."""
        settings = MagicMock()
        mocker.patch("autocommit.cli.main.load_settings", return_value=settings)
        calls = []
        mocker.patch(
            "autocommit.cli.main.run_autocommit",
            side_effect=lambda **kw: calls.append(("commit", kw)),
        )
        mocker.patch(
            "autocommit.cli.main.run_autorebase",
            side_effect=lambda **kw: calls.append(("rebase", kw)),
        )

        result = runner.invoke(app, ["-vv", "--dry-run"])

        assert result.exit_code == 0
        assert [name for name, _ in calls] == ["commit", "rebase"]
        for _, kwargs in calls:
            assert kwargs == {"verbosity": 2, "dry_run": True, "settings": settings}

    def test_subcommand_skips_default(self, mocker):
        """Test that invoking a subcommand does not run the default flow."""
        mock_default = mocker.patch("autocommit.cli.main.run_autocommit")
        mock_commit = mocker.patch("autocommit.cli.commit.run_autocommit")

        result = runner.invoke(app, ["commit"])

        assert result.exit_code == 0
        mock_default.assert_not_called()
        mock_commit.assert_called_once()

    def test_commit_failure_stops_before_rebase(self, mocker):
        """Test that an error in the commit step aborts the run."""
        mocker.patch("autocommit.cli.main.load_settings")
        mocker.patch("autocommit.cli.main.run_autocommit", side_effect=GitError("boom"))
        mock_rebase = mocker.patch("autocommit.cli.main.run_autorebase")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Git error: boom" in result.output
        mock_rebase.assert_not_called()


# ============================================================================
# Commit Command Tests
# ============================================================================


class TestCommitCommand:
    """Tests for autocommit commit."""

    def test_no_changes(self, mocker, temp_dir):
        """Test the message for a clean tree."""
        mocker.patch("autocommit.cli.commit.get_repo_root", return_value=temp_dir)
        mocker.patch("autocommit.cli.commit.get_status", return_value="")
        mock_provider = mocker.patch("autocommit.cli.commit.get_provider")

        result = runner.invoke(app, ["commit", "-v"])

        assert result.exit_code == 0
        assert "No changes to commit" in result.output
        mock_provider.assert_not_called()

    def test_quiet_by_default(self, mocker, temp_dir):
        """Test that nothing is printed without -v."""
        mocker.patch("autocommit.cli.commit.get_repo_root", return_value=temp_dir)
        mocker.patch("autocommit.cli.commit.get_status", return_value="")

        result = runner.invoke(app, ["commit"])

        assert result.exit_code == 0
        assert result.output == ""

    def test_model_plan_is_executed(self, mocker, temp_dir):
        """Test the model round trip and commit."""
        mocker.patch("autocommit.cli.commit.get_repo_root", return_value=temp_dir)
        mocker.patch("autocommit.cli.commit.get_status", return_value=" M app.txt")
        mocker.patch("autocommit.cli.commit.build_commit_context", return_value="CTX")
        mocker.patch("autocommit.cli.commit.load_settings")
        mocker.patch("autocommit.cli.commit.get_provider")
        plan = CommitPlan.model_validate(
            {"files": [{"path": "app.txt"}], "commit_message": "Update app\n\nDetails."}
        )
        mocker.patch(
            "autocommit.cli.commit.request_plan",
            return_value=(plan, LLMResult(raw_response="{}", model="m")),
        )
        mock_execute = mocker.patch(
            "autocommit.cli.commit.execute_commit_plan", return_value=plan.files
        )

        result = runner.invoke(app, ["commit", "-vv"])

        assert result.exit_code == 0
        mock_execute.assert_called_once_with(temp_dir, plan)
        assert "[autocommit] AI Response:" in result.output
        assert "[autocommit] Update app" in result.output
        assert "  - app.txt" in result.output

    def test_unactionable_plan_skips(self, mocker, temp_dir):
        """Test that a plan without message commits nothing."""
        mocker.patch("autocommit.cli.commit.get_repo_root", return_value=temp_dir)
        mocker.patch("autocommit.cli.commit.get_status", return_value=" M app.txt")
        mock_execute = mocker.patch("autocommit.cli.commit.execute_commit_plan")
        plan_file = _write_plan(temp_dir / "plan.json", {"files": [], "commit_message": None})

        result = runner.invoke(app, ["commit", "-v", "--from-plan", str(plan_file)])

        assert result.exit_code == 0
        assert "No meaningful commit can be made" in result.output
        mock_execute.assert_not_called()

    def test_missing_api_key(self, mocker, temp_dir):
        """Test that a missing key exits with an error."""
        mocker.patch("autocommit.cli.commit.get_repo_root", return_value=temp_dir)
        mocker.patch("autocommit.cli.commit.get_status", return_value=" M app.txt")
        mocker.patch("autocommit.cli.commit.build_commit_context", return_value="CTX")
        mocker.patch("autocommit.cli.commit.load_settings")
        mocker.patch("autocommit.cli.commit.get_provider")
        mocker.patch(
            "autocommit.cli.commit.request_plan",
            side_effect=MissingAPIKeyError("OpenAI API key not found."),
        )

        result = runner.invoke(app, ["commit"])

        assert result.exit_code == 1
        assert "OpenAI API key not found" in result.output

    def test_invalid_plan_file(self, temp_dir, mocker):
        """Test that an unreadable plan file is an LLM error."""
        mocker.patch("autocommit.cli.commit.get_repo_root", return_value=temp_dir)
        mocker.patch("autocommit.cli.commit.get_status", return_value=" M app.txt")
        plan_file = temp_dir / "plan.json"
        plan_file.write_text("{not json")

        result = runner.invoke(app, ["commit", "--from-plan", str(plan_file)])

        assert result.exit_code == 1
        assert "LLM error: Failed to read plan" in result.output

    def test_from_plan_stages_hunk(self, temp_repo, tmp_path, monkeypatch, run_git):
        """Test a partial commit end to end from a plan file."""
        (temp_repo / "app.txt").write_text("one\nTWO\nthree\nfour\nFIVE\n")
        plan_file = _write_plan(tmp_path / "plan.json", {
            "files": [{"path": "app.txt", "hunks": [
                {"oldStart": 2, "oldEnd": 2, "newStart": 2, "newEnd": 2},
            ]}],
            "commit_message": "Capitalize two",
        })
        monkeypatch.chdir(temp_repo)

        result = runner.invoke(app, ["commit", "-v", "--from-plan", str(plan_file)])

        assert result.exit_code == 0, result.output
        assert run_git(temp_repo, "log", "-1", "--pretty=%s") == "Capitalize two"
        assert run_git(temp_repo, "show", "HEAD:app.txt") == "one\nTWO\nthree\nfour\nfive"
        assert run_git(temp_repo, "status", "--porcelain") == "M app.txt"

    def test_dry_run_shows_patch(self, temp_repo, tmp_path, monkeypatch, run_git):
        """Test that dry run prints the patch and leaves the index alone."""
        (temp_repo / "app.txt").write_text("one\nTWO\nthree\nfour\nfive\n")
        plan_file = _write_plan(tmp_path / "plan.json", {
            "files": [
                {"path": "app.txt", "hunks": [
                    {"old_start": 2, "old_end": 2, "new_start": 2, "new_end": 2},
                ]},
                {"path": "README.md"},
            ],
            "commit_message": "Capitalize two",
        })
        monkeypatch.chdir(temp_repo)

        result = runner.invoke(app, ["commit", "--dry-run", "--from-plan", str(plan_file)])

        assert result.exit_code == 0
        assert "-two" in result.output
        assert "+TWO" in result.output
        assert "Would stage whole file: README.md" in result.output
        assert "Capitalize two" in result.output
        assert run_git(temp_repo, "diff", "--cached") == ""

    def test_malformed_range(self, temp_repo, tmp_path, monkeypatch):
        """Test that negative ranges are reported as an invalid plan."""
        (temp_repo / "app.txt").write_text("changed\n")
        plan_file = _write_plan(tmp_path / "plan.json", {
            "files": [{"path": "app.txt", "hunks": [
                {"old_start": -1, "old_end": 1, "new_start": 1, "new_end": 1},
            ]}],
            "commit_message": "Bad",
        })
        monkeypatch.chdir(temp_repo)

        result = runner.invoke(app, ["commit", "--from-plan", str(plan_file)])

        assert result.exit_code == 1
        assert "Invalid plan:" in result.output


# ============================================================================
# Rebase Command Tests
# ============================================================================


class TestRebaseCommand:
    """Tests for autocommit rebase."""

    def test_nothing_unpushed(self, mocker, temp_dir):
        """Test the skip message when nothing is unpushed."""
        mocker.patch("autocommit.cli.rebase.get_repo_root", return_value=temp_dir)
        mocker.patch("autocommit.cli.rebase.get_unpushed_patches", return_value="")
        mock_provider = mocker.patch("autocommit.cli.rebase.get_provider")

        result = runner.invoke(app, ["rebase", "-v"])

        assert result.exit_code == 0
        assert "Nothing to rebase" in result.output
        mock_provider.assert_not_called()

    def test_empty_plan(self, mocker, temp_dir, sample_unpushed_log):
        """Test that an empty model plan does nothing."""
        mocker.patch("autocommit.cli.rebase.get_repo_root", return_value=temp_dir)
        mocker.patch("autocommit.cli.rebase.get_unpushed_patches", return_value=sample_unpushed_log)
        mocker.patch("autocommit.cli.rebase.load_settings")
        mocker.patch("autocommit.cli.rebase.get_provider")
        mocker.patch(
            "autocommit.cli.rebase.request_plan",
            return_value=(RebasePlan(rebases=[]), LLMResult(raw_response="{}", model="m")),
        )
        mock_history = mocker.patch("autocommit.cli.rebase.read_unpushed_history")

        result = runner.invoke(app, ["rebase", "-v"])

        assert result.exit_code == 0
        assert "No rebase needed" in result.output
        mock_history.assert_not_called()

    def test_unknown_commits_are_listed(self, tracked_repo, tmp_path):
        """Test that every unknown sha is printed."""
        plan_file = _write_plan(tmp_path / "plan.json", {"rebases": [
            {"commit": "deadbeef", "action": "drop"},
            {"commit": "cafebabe", "action": "pick"},
        ]})

        result = runner.invoke(app, ["rebase", "--from-plan", str(plan_file)])

        assert result.exit_code == 1
        assert "None of the suggested rebase commits were found in history" in result.output
        assert "- deadbeef" in result.output
        assert "- cafebabe" in result.output

    def test_partially_unknown_commits(self, tracked_repo, tmp_path, run_git):
        """Test the message when only some commits are unknown."""
        head = run_git(tracked_repo, "rev-parse", "HEAD")
        plan_file = _write_plan(tmp_path / "plan.json", {"rebases": [
            {"commit": head, "action": "pick"},
            {"commit": "deadbeef", "action": "drop"},
        ]})

        result = runner.invoke(app, ["rebase", "--from-plan", str(plan_file)])

        assert result.exit_code == 1
        assert "not found in history" in result.output
        assert "- deadbeef" in result.output

    def test_dry_run_prints_script(self, tracked_repo, tmp_path, run_git):
        """Test that dry run prints the todo and leaves history alone."""
        first, second = run_git(tracked_repo, "rev-list", "--reverse", "base..HEAD").split("\n")
        plan_file = _write_plan(tmp_path / "plan.json", {"rebases": [
            {"commit": first[:8], "action": "reword", "message": "Add a file"},
        ]})

        result = runner.invoke(app, ["rebase", "--dry-run", "--from-plan", str(plan_file)])

        assert result.exit_code == 0
        assert f"reword {first} Add a file" in result.output
        assert f"pick {second} Add b" in result.output
        assert "Dry run, history unchanged" in result.output
        assert run_git(tracked_repo, "rev-parse", "HEAD") == second

    def test_single_step_plan_skips(self, tracked_repo, tmp_path, run_git):
        """Test that a plan touching only HEAD does not rebase."""
        head = run_git(tracked_repo, "rev-parse", "HEAD")
        plan_file = _write_plan(tmp_path / "plan.json", {"rebases": [
            {"commit": head, "action": "reword", "message": "New"},
        ]})

        result = runner.invoke(app, ["rebase", "-v", "--from-plan", str(plan_file)])

        assert result.exit_code == 0
        assert "less than 2 steps" in result.output
        assert run_git(tracked_repo, "rev-parse", "HEAD") == head

    def test_plan_dropping_everything_is_reported(self, tracked_repo, tmp_path, run_git):
        """Test that dropping every unpushed commit is reported, not mislabelled."""
        head = run_git(tracked_repo, "rev-parse", "HEAD")
        first, second = run_git(tracked_repo, "rev-list", "--reverse", "base..HEAD").split("\n")
        plan_file = _write_plan(tmp_path / "plan.json", {"rebases": [
            {"commit": first, "action": "drop"},
            {"commit": second, "action": "drop"},
        ]})

        result = runner.invoke(app, ["rebase", "-v", "--from-plan", str(plan_file)])

        assert result.exit_code == 0
        assert "Plan drops all 2 commit(s)" in result.output
        assert "plan not applied" in result.output
        assert "less than 2 steps" not in result.output
        assert run_git(tracked_repo, "rev-parse", "HEAD") == head

    def test_reports_upstream(self, tracked_repo, tmp_path, run_git):
        """Test that -vv names the upstream the history was read against."""
        first = run_git(tracked_repo, "rev-list", "--reverse", "base..HEAD").split("\n")[0]
        plan_file = _write_plan(tmp_path / "plan.json", {"rebases": [
            {"commit": first, "action": "pick"},
        ]})

        result = runner.invoke(app, ["rebase", "-vv", "--dry-run", "--from-plan", str(plan_file)])

        assert result.exit_code == 0
        assert "Read 2 unpushed commit(s) ahead of base." in result.output

    def test_squash_end_to_end(self, tracked_repo, tmp_path, run_git):
        """Test a real squash of the unpushed commits."""
        first, second = run_git(tracked_repo, "rev-list", "--reverse", "base..HEAD").split("\n")
        plan_file = _write_plan(tmp_path / "plan.json", {"rebases": [
            {"commit": first, "action": "reword", "message": "Add a and b"},
            {"commit": second, "action": "squash"},
        ]})

        result = runner.invoke(app, ["rebase", "-v", "--from-plan", str(plan_file)])

        assert result.exit_code == 0, result.output
        assert "Replayed 2 commit(s)" in result.output
        assert run_git(tracked_repo, "rev-list", "--count", "base..HEAD") == "1"
        assert run_git(tracked_repo, "log", "-1", "--pretty=%s") == "Add a and b"

    def test_rebase_failure(self, mocker, tracked_repo, tmp_path, run_git):
        """Test that a failed rebase exits with git's message."""
        first = run_git(tracked_repo, "rev-list", "--reverse", "base..HEAD").split("\n")[0]
        plan_file = _write_plan(tmp_path / "plan.json", {"rebases": [
            {"commit": first, "action": "drop"},
        ]})
        mocker.patch(
            "autocommit.cli.rebase.run_rebase",
            side_effect=RebaseExecutionError("git rebase onto abc failed:\nCONFLICT"),
        )

        result = runner.invoke(app, ["rebase", "--from-plan", str(plan_file)])

        assert result.exit_code == 1
        assert "CONFLICT" in result.output
