"""Unit tests for environment diagnostics"""

from unittest.mock import Mock, patch

import pymysql
import pytest
import requests

from wp_move.api.exceptions import ConnectivityError, PathError


@pytest.fixture
def mock_http():
    with patch("wp_move.services.diagnostics.requests.get") as mock_get:
        mock_get.return_value = Mock(status_code=200)
        yield mock_get


@pytest.fixture
def mock_db():
    with patch("wp_move.services.diagnostics.pymysql.connect") as mock_connect:
        yield mock_connect


class TestLocalDiagnostics:
    """Test suite for ``test`` on the local environment"""

    def test_three_checks_pass(self, make_runner, mock_http, mock_db):
        runner, executor = make_runner()

        result = runner.test("local")

        assert result.is_success
        assert result.steps == ["vhost", "path", "db"]
        assert executor.ran == []
        mock_http.assert_called_once_with("http://site.test", timeout=10)
        mock_db.assert_called_once_with(
            host="127.0.0.1", user="root", password="secret", database="wp", connect_timeout=5
        )
        mock_db.return_value.close.assert_called_once()

    def test_http_error_status(self, make_runner, mock_http, mock_db):
        mock_http.return_value = Mock(status_code=503)
        runner, _ = make_runner()

        with pytest.raises(ConnectivityError, match="503"):
            runner.test("local")

        mock_db.assert_not_called()

    def test_redirect_is_not_accepted(self, make_runner, mock_http, mock_db):
        mock_http.return_value = Mock(status_code=301)
        runner, _ = make_runner()

        with pytest.raises(ConnectivityError):
            runner.test("local")

    def test_unreachable_vhost(self, make_runner, mock_http, mock_db):
        mock_http.side_effect = requests.exceptions.ConnectionError("refused")
        runner, _ = make_runner()

        with pytest.raises(ConnectivityError, match="refused"):
            runner.test("local")

    def test_not_a_wordpress_root(self, make_runner, site, mock_http, mock_db):
        (site / "wp-settings.php").unlink()
        runner, _ = make_runner()

        with pytest.raises(PathError):
            runner.test("local")

        mock_db.assert_not_called()

    def test_database_refused(self, make_runner, mock_http, mock_db):
        mock_db.side_effect = pymysql.err.OperationalError(2003, "Can't connect to MySQL server")
        runner, _ = make_runner()

        with pytest.raises(ConnectivityError, match="Can't connect"):
            runner.test("local")


class TestRemoteDiagnostics:
    """Test suite for ``test`` on an SSH environment"""

    def test_four_checks_pass(self, make_runner, mock_http, mock_db):
        runner, executor = make_runner()
        executor.script("wp-settings.php", stdout="1\n")

        result = runner.test("staging")

        assert result.steps == ["ssh", "vhost", "path", "db"]
        lines = executor.lines()
        assert "ConnectTimeout=5" in lines[0]
        assert "cd /srv/www/staging && [ -f wp-settings.php ]" in lines[1]
        assert "db check" in lines[-1]
        mock_db.assert_not_called()

    def test_ssh_failure_stops_early(self, make_runner, mock_http, mock_db):
        runner, executor = make_runner()
        executor.script("ConnectTimeout", return_code=255, stderr="Connection refused")

        with pytest.raises(ConnectivityError, match="Connection refused"):
            runner.test("staging")

        mock_http.assert_not_called()
        assert len(executor.spawned) == 1

    def test_remote_path_missing(self, make_runner, mock_http, mock_db):
        runner, executor = make_runner()
        executor.script("wp-settings.php", stdout="0\n")

        with pytest.raises(PathError, match="/srv/www/staging"):
            runner.test("staging")

    def test_remote_database_check_failure(self, make_runner, mock_http, mock_db):
        runner, executor = make_runner()
        executor.script("wp-settings.php", stdout="1\n")
        executor.script("db check", return_code=1)

        with pytest.raises(ConnectivityError, match="Database check failed"):
            runner.test("staging")
