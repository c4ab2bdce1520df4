"""Unit tests for ClaudioConfig."""

import pytest
from pathlib import Path

from claudio.config import ClaudioConfig


@pytest.mark.unit
class TestClaudioConfig:

    def test_defaults(self):
        config = ClaudioConfig()

        assert config.config_file is None
        assert config.get_wake_word() == "claude"
        assert config.get('limits.max_recent_turns') == 50
        assert config.get_daemon_log_path().name == "brabble.log"
        assert config.get_hook_log_path().parent == config.get_transcripts_log_path().parent
        assert "~" not in str(config.get_hook_log_path())

    def test_paths_resolve_against_config_file(self, test_config, config_file):
        log_dir = config_file.parent / "brabble"

        assert test_config.get_transcripts_log_path() == log_dir / "transcripts.log"
        assert test_config.get_hook_log_path() == log_dir / "claude-hook.log"
        assert test_config.get('logging.file_path') == str(config_file.parent / "logs" / "claudio.log")

    def test_overrides_merge_with_defaults(self, test_config):
        assert test_config.get('limits.max_recent_transcriptions') == 5
        assert test_config.get('sessions.gap_threshold_seconds') == 300

    def test_absolute_log_file_path(self, temp_data_dir):
        config_path = Path(temp_data_dir) / "claudio.yaml"
        absolute = Path(temp_data_dir) / "elsewhere" / "hook.log"
        config_path.write_text(f"logs:\n  hook: {absolute}\n", encoding="utf-8")

        assert ClaudioConfig(str(config_path)).get_hook_log_path() == absolute

    def test_get_and_set(self, test_config):
        assert test_config.get('does.not.exist', 'fallback') == 'fallback'

        test_config.set('host.poll_interval_seconds', 2)
        test_config.set('new.section.value', True)

        assert test_config.get('host.poll_interval_seconds') == 2
        assert test_config.get('new.section.value') is True

    def test_missing_file(self, temp_data_dir):
        with pytest.raises(FileNotFoundError):
            ClaudioConfig(str(Path(temp_data_dir) / "nope.yaml"))

    def test_invalid_yaml(self, temp_data_dir):
        config_path = Path(temp_data_dir) / "bad.yaml"
        config_path.write_text("logs: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError):
            ClaudioConfig(str(config_path))

    def test_non_mapping_yaml(self, temp_data_dir):
        config_path = Path(temp_data_dir) / "list.yaml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError):
            ClaudioConfig(str(config_path))
