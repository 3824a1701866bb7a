"""Test suite for configuration, CLI overrides and the viewer hand-off."""

import argparse
from pathlib import Path

import pytest

from mailstream.__main__ import apply_overrides
from mailstream.app.app_config import AppConfig
from mailstream.app.viewer import open_in_viewer, viewer_command
from mailstream.common.app import AppDirs


def make_args(**overrides) -> argparse.Namespace:
    """Namespace with every override unset."""
    values = {"mu": None, "min_length": None, "viewer": None}
    values.update(overrides)
    return argparse.Namespace(**values)


class TestAppConfig:
    """Persisted configuration."""

    def test_json_round_trip(self):
        """Config survives being written and read back."""
        config = AppConfig(viewer_command="less {id}")
        restored = AppConfig.model_validate_json(config.model_dump_json(indent=2))
        assert restored == config

    def test_overrides(self):
        """CLI flags replace individual values."""
        config = apply_overrides(AppConfig(), make_args(mu="/opt/mu", min_length=1, viewer="cat {id}"))
        assert config.search.executable == "/opt/mu"
        assert config.search.min_query_length == 1
        assert config.viewer_command == "cat {id}"

    def test_no_overrides(self):
        """Without flags the config is unchanged."""
        config = AppConfig()
        assert apply_overrides(config, make_args()) == config

    def test_temp_app_dir(self):
        """Temporary mode moves every path under a fresh directory."""
        dirs = AppDirs()
        dirs.use_temp_app_data_dir()
        assert dirs.app_data_dir.exists()
        assert dirs.app_config_path.parent == dirs.app_data_dir
        assert dirs.app_log_path.parent == dirs.app_data_dir


class TestViewer:
    """Handing the chosen message to a viewer."""

    def test_identifier_is_quoted(self):
        """The message-id is substituted as one shell word."""
        assert viewer_command("a'b@x", "view {id}") == "view 'a'\"'\"'b@x'"

    def test_prints_without_template(self, capsys: pytest.CaptureFixture[str]):
        """Without a viewer the identifier goes to stdout."""
        assert open_in_viewer("id123", None) is None
        assert capsys.readouterr().out == "id123\n"

    def test_runs_template(self, temp_workspace: Path):
        """The viewer command runs with the identifier."""
        target = temp_workspace / "out.txt"
        assert open_in_viewer("id123", f"printf %s {{id}} > {target}") == 0
        assert target.read_text() == "id123"
