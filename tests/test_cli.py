"""Tests for the command-line interface."""

import logging

import pytest
import yaml
from click.testing import CliRunner

from backup_mirror.cli import cli, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging replaces the root handlers; put them back after each test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "backup-mirror.yaml"


def invoke(config_file, *args):
    return CliRunner().invoke(cli, ['--config', str(config_file), *args])


class TestRunCommand:
    """Test suite for `backup-mirror run`."""

    def test_backup_and_verify(self, roots, make_tree, config_file):
        source, target = roots
        make_tree(source, {"a.txt": "a", "sub/b.txt": "bb"})

        result = invoke(config_file, 'run', '-s', str(source), '-t', str(target))

        assert result.exit_code == 0, result.output
        assert (target / "sub" / "b.txt").read_text() == "bb"
        assert "Starting Backup..." in result.output
        assert "Everything okay!" in result.output

    def test_roots_are_persisted(self, roots, config_file):
        source, target = roots

        invoke(config_file, 'run', '-s', str(source), '-t', str(target))

        data = yaml.safe_load(config_file.read_text())
        assert data['source'] == str(source)
        assert data['target'] == str(target)

    def test_stored_roots_are_reused(self, roots, make_tree, config_file):
        source, target = roots
        make_tree(source, {"a.txt": "a"})
        config_file.write_text(yaml.safe_dump({'source': str(source), 'target': str(target)}))

        result = invoke(config_file, 'run')

        assert result.exit_code == 0, result.output
        assert "Loaded source from config" in result.output
        assert (target / "a.txt").exists()

    def test_verify_only_skips_backup(self, roots, make_tree, config_file):
        source, target = roots
        make_tree(source, {"a.txt": "a"})

        result = invoke(config_file, 'run', '-s', str(source), '-t', str(target), '--verify-only')

        assert result.exit_code == 0, result.output
        assert "Skipping Backup..." in result.output
        assert "Starting Backup..." not in result.output
        assert "Found 1 issues!" in result.output

    def test_missing_roots_are_fatal(self, config_file):
        result = invoke(config_file, 'run')

        assert result.exit_code == 1
        assert "Please specify both" in result.stderr

    def test_nonexistent_root_is_fatal(self, roots, tmp_path, config_file):
        source, _ = roots

        result = invoke(config_file, 'run', '-s', str(source), '-t', str(tmp_path / "nope"))

        assert result.exit_code == 1
        assert "could not be found" in result.stderr

    def test_nested_target_is_fatal_and_clears_stored_roots(self, roots, make_tree, config_file):
        source, _ = roots
        make_tree(source, {"a.txt": "a"})
        nested = source / "backup"
        nested.mkdir()

        result = invoke(config_file, 'run', '-s', str(source), '-t', str(nested))

        assert result.exit_code == 1
        assert "must not be inside the source" in result.stderr
        assert list(nested.iterdir()) == []
        data = yaml.safe_load(config_file.read_text())
        assert data['source'] is None
        assert data['target'] is None

    def test_gave_up_exit_code(self, roots, make_tree, config_file):
        source, target = roots
        make_tree(source, {"a.txt": "aaaa"})
        make_tree(target, {"a.txt": "a"})

        result = invoke(config_file, 'run', '-s', str(source), '-t', str(target), '--max-passes', '2')

        assert result.exit_code == 2
        assert "Giving up after 2 passes" in result.output

    def test_repair_overwrite_fixes_size_drift(self, roots, make_tree, config_file):
        source, target = roots
        make_tree(source, {"a.txt": "aaaa"})
        make_tree(target, {"a.txt": "a"})

        result = invoke(config_file, 'verify', '-s', str(source), '-t', str(target),
                        '--repair-overwrite', '--max-passes', '3')

        assert result.exit_code == 0, result.output
        assert (target / "a.txt").read_text() == "aaaa"

    def test_debug_output(self, roots, make_tree, config_file):
        source, target = roots
        make_tree(source, {"a.txt": "a"})

        result = invoke(config_file, 'run', '-s', str(source), '-t', str(target), '--debug')

        assert result.exit_code == 0, result.output
        assert "Processing 1 files." in result.output

    def test_summary_verification(self, roots, make_tree, config_file):
        source, target = roots
        make_tree(source, {"a.txt": "a"})

        result = invoke(config_file, 'run', '-s', str(source), '-t', str(target), '--summary')

        assert result.exit_code == 0, result.output
        assert "Summary:" in result.output


class TestShowConfigCommand:
    """Test suite for `backup-mirror show-config`."""

    def test_shows_stored_roots(self, roots, config_file):
        source, target = roots
        config_file.write_text(yaml.safe_dump({'source': str(source), 'target': str(target)}))

        result = invoke(config_file, 'show-config')

        assert result.exit_code == 0, result.output
        assert f"Source: {source}" in result.output
        assert "Max passes: unlimited" in result.output

    def test_shows_unset_roots(self, config_file):
        result = invoke(config_file, 'show-config')

        assert result.exit_code == 0, result.output
        assert "Source: Not set" in result.output

    def test_invalid_config_file(self, config_file):
        config_file.write_text("source: [unclosed")

        result = invoke(config_file, 'show-config')

        assert result.exit_code == 1
        assert "Could not deserialize" in result.stderr


class TestSetupLogging:
    """Test suite for setup_logging()."""

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            setup_logging("LOUD")

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "mirror.log"
        setup_logging("INFO", str(log_file))

        logging.getLogger("backup_mirror.test").info("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "INFO - written to file" in log_file.read_text()
