"""Tests for the Mover API"""

from unittest.mock import patch

from wp_move.api.mover import Mover
from wp_move.constants import SYNC_FOLDERS


class TestMover:
    """Test suite for Mover"""

    @patch("wp_move.api.mover.TaskRunner")
    def test_push_all_selects_every_folder_and_database(self, mock_runner, config_file):
        Mover(config_file).push("production", folders=["themes"], all_=True)

        mock_runner.return_value.push.assert_called_once_with(
            "production", list(SYNC_FOLDERS), True, False
        )

    @patch("wp_move.api.mover.TaskRunner")
    def test_pull_keeps_selection_without_all(self, mock_runner, config_file):
        Mover(config_file).pull("staging", folders=["uploads"], delete=True)

        mock_runner.return_value.pull.assert_called_once_with("staging", ["uploads"], False, True)

    @patch("wp_move.api.mover.TaskRunner")
    def test_builtin_all_is_not_shadowed(self, mock_runner, config_file):
        """``all_`` is the keyword; the builtin stays usable in callers"""
        Mover(config_file).pull("staging", all_=True)

        args = mock_runner.return_value.pull.call_args.args
        assert all(folder in args[1] for folder in SYNC_FOLDERS)
        assert args[2] is True
