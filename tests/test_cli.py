"""
Tests for the command-line interface and user configuration.
"""

import csv
import json
from pathlib import Path

import pytest

from dupescan.cli import main, parse_arguments
from dupescan.utils.exporters import export_results
from dupescan.models import DuplicateGroup, ImageHash


class TestParseArguments:
    """Test parse_arguments."""

    def test_defaults(self):
        args = parse_arguments([])
        assert args.directory is None
        assert args.hash_method is None
        assert args.workers is None
        assert args.export_format == 'txt'

    def test_options(self):
        args = parse_arguments(['/photos', '-m', 'Perceptual', '-w', '3', '--no-progress', '-r'])
        assert args.directory == Path('/photos')
        assert args.hash_method == 'Perceptual'
        assert args.workers == 3
        assert args.no_progress
        assert args.no_recursive


class TestMain:
    """End-to-end tests for the CLI entry point."""

    def test_reports_duplicates(self, duplicate_dir, capsys):
        exit_code = main([str(duplicate_dir), '--no-progress'])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert "Found 3 images" in out
        assert "Potential Duplicates:" in out
        assert "first.png" in out
        assert "second.png" in out
        assert "other.png" not in out
        assert out.count("Hash: ") == 1

    @pytest.mark.parametrize("method", ["Average", "perceptual", "DIFFERENCE"])
    def test_each_method(self, duplicate_dir, capsys, method):
        assert main([str(duplicate_dir), '-m', method, '--no-progress']) == 0
        out = capsys.readouterr().out
        assert f"Hash method: {method.lower()}" in out
        assert out.count("path= ") == 2

    def test_missing_directory_argument(self, capsys):
        assert main([]) == 1

    def test_unknown_hash_method(self, duplicate_dir, capsys):
        assert main([str(duplicate_dir), '-m', 'wavelet']) == 1
        assert "DUPLICATE IMAGE REPORT" not in capsys.readouterr().out

    def test_invalid_worker_count(self, duplicate_dir):
        assert main([str(duplicate_dir), '-w', '0']) == 1

    def test_untraversable_directory(self, temp_dir):
        assert main([str(temp_dir / "missing"), '--no-progress']) == 1

    def test_no_duplicates(self, temp_dir, capsys):
        assert main([str(temp_dir), '--no-progress']) == 0
        out = capsys.readouterr().out
        assert "Found 0 images" in out
        assert "Potential Duplicates:" not in out

    def test_export_csv(self, duplicate_dir, temp_dir):
        out_file = temp_dir / "report.csv"
        exit_code = main([
            str(duplicate_dir), '--no-progress',
            '--export', str(out_file), '--export-format', 'csv',
        ])
        assert exit_code == 0

        with open(out_file, newline='', encoding='utf-8') as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 2
        assert {Path(r['path']).name for r in rows} == {"first.png", "second.png"}
        assert rows[0]['group_id'] == rows[1]['group_id'] == '1'
        assert len(rows[0]['hash_bits']) == 64

    def test_method_from_user_config(self, duplicate_dir, capsys, monkeypatch, isolated_user_config):
        monkeypatch.setenv('DUPESCAN_HASH_METHOD', 'difference')
        assert main([str(duplicate_dir), '--no-progress']) == 0
        assert "Hash method: difference" in capsys.readouterr().out

    def test_invalid_method_in_user_config(self, duplicate_dir, isolated_user_config):
        config_dir = isolated_user_config.config_dir
        config_dir.mkdir(parents=True)
        (config_dir / 'config.json').write_text(json.dumps({"default_hash_method": "blur"}))
        isolated_user_config.reload()
        assert main([str(duplicate_dir), '--no-progress']) == 1


class TestExportResults:
    """Test export_results."""

    def test_txt(self, temp_dir):
        group = DuplicateGroup(hash=ImageHash(1), paths=["/a.png", "/b.png"])
        out_file = temp_dir / "report.txt"
        export_results([group], out_file, 'txt')
        text = out_file.read_text(encoding='utf-8')
        assert "Group 1 (2 files):" in text
        assert "8000000000000000" in text
        assert "/a.png" in text and "/b.png" in text

    def test_unknown_format(self, temp_dir):
        with pytest.raises(ValueError):
            export_results([], temp_dir / "x.json", 'json')


class TestUserConfig:
    """Test UserConfig priority rules."""

    def test_defaults(self, isolated_user_config):
        assert isolated_user_config.default_hash_method == 'average'
        assert isolated_user_config.default_workers >= 1
        assert isolated_user_config.show_progress is True

    def test_env_overrides_file(self, isolated_user_config, monkeypatch):
        config_dir = isolated_user_config.config_dir
        config_dir.mkdir(parents=True)
        (config_dir / 'config.json').write_text(json.dumps({"default_workers": 2}))
        isolated_user_config.reload()
        assert isolated_user_config.default_workers == 2

        monkeypatch.setenv('DUPESCAN_WORKERS', '6')
        assert isolated_user_config.default_workers == 6

    def test_create_example_config(self, isolated_user_config):
        assert isolated_user_config.create_example_config()
        data = json.loads(isolated_user_config.config_file_path.read_text(encoding='utf-8'))
        assert data['default_hash_method'] == 'average'

    @pytest.mark.parametrize("raw,expected", [
        ("no", False), ("off", False), ("false", False), ("0", False), ("NO", False),
        ("yes", True), ("on", True), ("true", True), ("1", True),
    ])
    def test_show_progress_env_spellings(self, isolated_user_config, monkeypatch, raw, expected):
        monkeypatch.setenv('DUPESCAN_SHOW_PROGRESS', raw)
        assert isolated_user_config.show_progress is expected

    def test_show_progress_from_file_string(self, isolated_user_config):
        config_dir = isolated_user_config.config_dir
        config_dir.mkdir(parents=True)
        (config_dir / 'config.json').write_text(json.dumps({"show_progress": "off"}))
        isolated_user_config.reload()
        assert isolated_user_config.show_progress is False

    def test_show_progress_unrecognised_keeps_default(self, isolated_user_config, monkeypatch):
        monkeypatch.setenv('DUPESCAN_SHOW_PROGRESS', 'maybe')
        assert isolated_user_config.show_progress is True


class TestPackageMetadata:
    """Test package metadata."""

    def test_author_is_project_author(self):
        import dupescan
        assert dupescan.__author__ == "dupescan contributors"
