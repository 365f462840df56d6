"""Unit tests for CommandExecutor"""

from unittest.mock import Mock, patch

from conftest import RecordingExecutor

from wp_move.core.executor import Command, CommandExecutor


class TestCommand:
    """Test suite for Command"""

    def test_display_quotes_arguments(self):
        command = Command("wp", ["search-replace", "http://a b", "https://c"])

        assert command.display() == "wp search-replace 'http://a b' https://c"

    def test_display_prefixes_environment(self):
        command = Command("wp", ["db", "export"], env={"MYSQLDUMP_PATH": "/usr/bin/mysqldump"})

        assert command.display() == "MYSQLDUMP_PATH=/usr/bin/mysqldump wp db export"

    def test_is_sync_uses_program_basename(self):
        assert Command("/usr/bin/rsync").is_sync
        assert not Command("scp").is_sync


class TestCommandExecutor:
    """Test suite for CommandExecutor"""

    def test_ssh_options_use_pid_socket(self):
        executor = CommandExecutor(pid=123)

        assert executor.ssh_options == [
            "-o", "ControlMaster=auto",
            "-o", "ControlPath=/tmp/wp-move-ssh-123",
            "-o", "ControlPersist=60s",
        ]
        assert executor.ssh_command_string.startswith("ssh -o ControlMaster=auto")

    def test_dry_run_simulates_non_sync_commands(self):
        executor = RecordingExecutor(dry_run=True)

        result = executor.run(Command("scp", ["a", "b"]), capture=True)

        assert result.ok
        assert result.simulated
        assert result.stdout == ""
        assert executor.spawned == []

    def test_dry_run_executes_rsync_with_trial_flags(self):
        executor = RecordingExecutor(dry_run=True)

        executor.run(Command("rsync", ["-avz", "src/", "dst"]))

        assert len(executor.spawned) == 1
        assert executor.spawned[0].args == ["--dry-run", "--itemize-changes", "-avz", "src/", "dst"]

    def test_trial_flags_are_not_duplicated(self):
        executor = RecordingExecutor(dry_run=True)

        executor.run(Command("rsync", ["--dry-run", "-avz", "src/", "dst"]))

        args = executor.spawned[0].args
        assert args.count("--dry-run") == 1
        assert "--itemize-changes" in args

    def test_real_run_spawns_every_command(self):
        executor = RecordingExecutor()

        executor.run(Command("scp", ["a", "b"]))
        executor.run(Command("rsync", ["src/", "dst"]))

        assert [command.program for command in executor.spawned] == ["scp", "rsync"]
        assert "--dry-run" not in executor.spawned[1].args

    @patch("wp_move.core.executor.subprocess.run")
    def test_spawn_captures_output(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="/usr/bin/wp\n", stderr="")
        executor = CommandExecutor()

        result = executor.run(Command("ssh", ["host", "command -v wp"]), capture=True)

        assert result.ok
        assert result.stdout == "/usr/bin/wp\n"
        mock_run.assert_called_once_with(
            ["ssh", "host", "command -v wp"], env=None, capture_output=True, text=True
        )

    @patch("wp_move.core.executor.subprocess.run")
    def test_spawn_merges_environment(self, mock_run, monkeypatch):
        monkeypatch.setenv("WP_MOVE_TEST_MARKER", "1")
        mock_run.return_value = Mock(returncode=2)
        executor = CommandExecutor()

        result = executor.run(Command("wp", ["db", "export"], env={"MYSQLDUMP_PATH": "/x"}))

        assert result.return_code == 2
        assert result.stdout is None
        env = mock_run.call_args.kwargs["env"]
        assert env["MYSQLDUMP_PATH"] == "/x"
        assert env["WP_MOVE_TEST_MARKER"] == "1"

    @patch("wp_move.core.executor.subprocess.run", side_effect=FileNotFoundError("No such file: 'wp'"))
    def test_missing_program_returns_127(self, mock_run):
        result = CommandExecutor().run(Command("wp", ["--info"]))

        assert result.return_code == 127
        assert "No such file" in result.stderr

    @patch("wp_move.core.executor.subprocess.run")
    def test_dry_run_never_calls_subprocess_for_ssh(self, mock_run):
        CommandExecutor(dry_run=True).run(Command("ssh", ["host", "rm -f /tmp/x"]))

        mock_run.assert_not_called()
