"""Unit tests for move.yml loading"""

import pytest

from wp_move.api.exceptions import ConfigError
from wp_move.constants import DumpRetention, ErrorCode
from wp_move.services.config_service import EnvironmentResolver, find_config_file


LOCAL_SECTION = """
local:
  wp_path: /var/www/site
  vhost: http://site.test
  db:
    user: root
    password: secret
    name: wp
"""


class TestEnvironmentResolver:
    """Test suite for EnvironmentResolver"""

    def test_resolve_remote_environment(self, resolver):
        """Remote sections expose the ssh target and ignore db"""
        staging = resolver.resolve("staging")

        assert staging.is_remote
        assert staging.ssh_target == "deploy@staging.example.com"
        assert staging.exclude == [".git", "cache/"]
        assert staging.not_push == frozenset({"uploads"})
        assert staging.db is None

    def test_resolve_local_environment(self, resolver, site):
        local = resolver.get_local()

        assert not local.is_remote
        assert local.wp_path == str(site)
        assert local.db.host == "127.0.0.1"
        assert local.dump_retention == DumpRetention.KEEP

    def test_db_host_defaults_to_localhost(self, resolver):
        assert resolver.resolve("mirror").db.host == "localhost"

    def test_names_keep_file_order(self, resolver):
        assert resolver.names() == ["local", "staging", "production", "mirror"]

    def test_unknown_environment(self, resolver):
        with pytest.raises(ConfigError) as exc_info:
            resolver.resolve("qa")

        assert "qa" in str(exc_info.value)
        assert exc_info.value.error_code == ErrorCode.CONFIG_ERROR

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            EnvironmentResolver(tmp_path / "move.yml").load()

    def test_missing_local_section(self, write_config):
        path = write_config("staging:\n  ssh: a@b\n  wp_path: /srv\n  vhost: https://b\n")

        with pytest.raises(ConfigError, match="'local' section is missing"):
            EnvironmentResolver(path).load()

    def test_invalid_yaml(self, write_config):
        path = write_config("local: [unclosed\n")

        with pytest.raises(ConfigError, match="Error parsing"):
            EnvironmentResolver(path).load()

    def test_not_a_mapping(self, write_config):
        path = write_config("- local\n- staging\n")

        with pytest.raises(ConfigError, match="mapping"):
            EnvironmentResolver(path).load()

    def test_local_without_db_is_rejected(self, write_config):
        """A section without ssh target needs database credentials"""
        path = write_config("local:\n  wp_path: /var/www/site\n  vhost: http://site.test\n")

        with pytest.raises(ConfigError, match="needs 'db'"):
            EnvironmentResolver(path).load()

    def test_invalid_section_fails_whole_file(self, write_config):
        """A broken environment fails the load even if another one is requested"""
        path = write_config(LOCAL_SECTION + "prod:\n  ssh: a@b\n  vhost: https://b\n")
        resolver = EnvironmentResolver(path)

        with pytest.raises(ConfigError, match="wp_path"):
            resolver.resolve("local")

    def test_unknown_key(self, write_config):
        path = write_config(LOCAL_SECTION + "  colour: blue\n")

        with pytest.raises(ConfigError, match="colour"):
            EnvironmentResolver(path).load()

    def test_unknown_not_push_folder(self, write_config):
        path = write_config(
            LOCAL_SECTION
            + "staging:\n  ssh: a@b\n  wp_path: /srv\n  vhost: https://b\n  not_push: [languages]\n"
        )

        with pytest.raises(ConfigError, match="languages"):
            EnvironmentResolver(path).load()

    def test_ssh_and_ssh_target_conflict(self, write_config):
        path = write_config(
            LOCAL_SECTION
            + "staging:\n  ssh: a@b\n  ssh_target: c@d\n  wp_path: /srv\n  vhost: https://b\n"
        )

        with pytest.raises(ConfigError, match="both"):
            EnvironmentResolver(path).load()

    def test_ssh_target_key_is_accepted(self, write_config):
        path = write_config(
            LOCAL_SECTION + "staging:\n  ssh_target: c@d\n  wp_path: /srv\n  vhost: https://b\n"
        )

        assert EnvironmentResolver(path).resolve("staging").ssh_target == "c@d"

    def test_empty_ssh_requires_db(self, write_config):
        """An empty ssh value makes the section local, so db is required"""
        path = write_config(
            LOCAL_SECTION + "edge:\n  ssh: ''\n  wp_path: /srv\n  vhost: https://b\n"
        )

        with pytest.raises(ConfigError, match="needs 'db'"):
            EnvironmentResolver(path).load()

    def test_empty_ssh_with_db_is_local(self, write_config):
        path = write_config(
            LOCAL_SECTION
            + "edge:\n  ssh: ''\n  wp_path: /srv\n  vhost: https://b\n"
            + "  db:\n    user: edge\n    name: edge\n"
        )
        edge = EnvironmentResolver(path).resolve("edge")

        assert not edge.is_remote
        assert edge.ssh_target is None
        assert edge.db.name == "edge"

    def test_invalid_dump_retention(self, write_config):
        path = write_config(LOCAL_SECTION + "  dump_retention: forever\n")

        with pytest.raises(ConfigError, match="dump_retention"):
            EnvironmentResolver(path).load()

    def test_environment_variables_are_expanded(self, write_config, monkeypatch):
        monkeypatch.setenv("WP_MOVE_TEST_PASSWORD", "from-env")
        path = write_config(LOCAL_SECTION.replace("secret", "${WP_MOVE_TEST_PASSWORD}"))

        assert EnvironmentResolver(path).get_local().db.password == "from-env"

    def test_file_is_parsed_once(self, resolver, config_file):
        resolver.resolve("staging")
        config_file.write_text("garbage: [")

        assert resolver.resolve("production").wp_cli_path == "/opt/wp-cli/wp"


class TestFindConfigFile:
    """Test suite for move.yml discovery"""

    def test_walks_up_from_start_path(self, tmp_path, monkeypatch):
        monkeypatch.delenv("WP_MOVE_CONFIG", raising=False)
        (tmp_path / "move.yml").write_text(LOCAL_SECTION)
        nested = tmp_path / "wp-content" / "themes"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == (tmp_path / "move.yml").resolve()

    def test_environment_variable_wins(self, tmp_path, monkeypatch):
        custom = tmp_path / "custom.yml"
        monkeypatch.setenv("WP_MOVE_CONFIG", str(custom))
        (tmp_path / "move.yml").write_text(LOCAL_SECTION)

        assert find_config_file(tmp_path) == custom

    def test_not_found(self, tmp_path, monkeypatch):
        monkeypatch.delenv("WP_MOVE_CONFIG", raising=False)
        monkeypatch.setattr("wp_move.services.config_service.CONFIG_FILE_NAME",
                            "wp-move-test-does-not-exist.yml")

        assert find_config_file(tmp_path) is None
