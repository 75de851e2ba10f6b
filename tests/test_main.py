"""Unit tests for the command-line entry point."""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from dupfinder.config.environment import EnvironmentConfig
from dupfinder.config.exceptions import CandidateLoadError, ConfigurationError
from dupfinder.config.models import AppConfig, LoggingConfig
from dupfinder.main import load_candidates, load_runtime_config, main

FIXTURES_DIR = Path(__file__).parent / "fixtures"
JOB_LINES = FIXTURES_DIR / "job_lines.json"


@pytest.fixture(autouse=True)
def isolate(tmp_path, monkeypatch):
    """Run from an empty directory and restore the root logger afterwards."""
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLoadRuntimeConfig:
    """Tests for log level resolution."""

    def _patched(self, env_level=None, config_level="WARNING"):
        app_config = AppConfig(logging=LoggingConfig(level=config_level))
        env_config = EnvironmentConfig(log_level=env_level)
        return patch("dupfinder.main.load_config", return_value=(app_config, env_config))

    def test_cli_wins(self):
        with self._patched(env_level="ERROR"):
            _, env_config = load_runtime_config(None, "DEBUG")
        assert env_config.log_level == "DEBUG"

    def test_environment_beats_config(self):
        with self._patched(env_level="ERROR"):
            _, env_config = load_runtime_config(None, None)
        assert env_config.log_level == "ERROR"

    def test_config_file_fallback(self):
        with self._patched():
            _, env_config = load_runtime_config(None, None)
        assert env_config.log_level == "WARNING"

    def test_configuration_error_propagates(self):
        with patch("dupfinder.main.load_config", side_effect=ConfigurationError("bad")):
            with pytest.raises(ConfigurationError):
                load_runtime_config(None, None)


class TestLoadCandidates:
    """Tests for reading the candidates file."""

    def test_loads_records(self):
        candidates = load_candidates(JOB_LINES)

        assert [c.id for c in candidates] == ["101", "102", "103", "104"]
        assert candidates[3].name == "Oil-Change!"
        assert candidates[0].metadata["price"] == 189.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(CandidateLoadError):
            load_candidates(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[{")
        with pytest.raises(CandidateLoadError):
            load_candidates(path)

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text('{"id": 1, "name": "Oil"}')
        with pytest.raises(CandidateLoadError):
            load_candidates(path)

    def test_row_not_an_object(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text('["Oil Change"]')
        with pytest.raises(CandidateLoadError):
            load_candidates(path)

    def test_invalid_row(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text('[{"id": 1}]')
        with pytest.raises(CandidateLoadError) as exc_info:
            load_candidates(path)
        assert "Candidate 0" in str(exc_info.value)


class TestMain:
    """Tests for main()."""

    def test_query_text_output(self, capsys):
        exit_code = main(["--query", "oil change", "--candidates", str(JOB_LINES)])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "Possible duplicates of: oil change" in out
        assert "Oil Change [exact, 100%] (id=102)" in out
        assert "Oil-Change! [exact, 100%] (id=104)" in out

    def test_query_json_output(self, capsys):
        exit_code = main([
            "--query", "oil change",
            "--candidates", str(JOB_LINES),
            "--output", "json",
            "--exclude-id", "104",
            "--group-by", "category_name",
        ])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert [m["id"] for m in payload["matches"]] == ["102"]
        assert payload["groups"] == {"Engine": ["102"]}

    def test_no_matches_is_success(self, capsys):
        exit_code = main(["--query", "septic pumping", "--candidates", str(JOB_LINES)])

        assert exit_code == 0
        assert "No similar items found." in capsys.readouterr().out

    def test_scan(self, capsys):
        exit_code = main(["--scan", "--candidates", str(JOB_LINES), "--output", "json"])

        assert exit_code == 0
        pairs = json.loads(capsys.readouterr().out)
        found = {(p["first_id"], p["second_id"]): p["match_type"] for p in pairs}
        assert found == {("101", "103"): "similar", ("102", "104"): "exact"}

    def test_config_file_applied(self, tmp_path, capsys):
        config_file = tmp_path / "dupfinder.yaml"
        config_file.write_text("matching:\n  match_types: [similar, partial]\n")

        exit_code = main(["--query", "oil change", "--candidates", str(JOB_LINES)])

        assert exit_code == 0
        # Exact matches are disabled and must not be downgraded
        assert "No similar items found." in capsys.readouterr().out

    def test_max_results(self, tmp_path, capsys):
        config_file = tmp_path / "dupfinder.yaml"
        config_file.write_text("search:\n  max_results: 1\n")

        main(["--query", "oil change", "--candidates", str(JOB_LINES), "--output", "json"])
        assert json.loads(capsys.readouterr().out)["match_count"] == 1

    def test_max_candidates(self, tmp_path, capsys):
        config_file = tmp_path / "dupfinder.yaml"
        config_file.write_text("search:\n  max_candidates: 2\n")

        main(["--query", "oil change", "--candidates", str(JOB_LINES), "--output", "json"])
        payload = json.loads(capsys.readouterr().out)
        assert [m["id"] for m in payload["matches"]] == ["102"]

    def test_configuration_error_exit_code(self, tmp_path, capsys):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("matching:\n  similarity_threshold: 150\n")

        exit_code = main([
            "--query", "oil", "--candidates", str(JOB_LINES), "--config", str(config_file)
        ])

        assert exit_code == 1
        assert "Configuration Error" in capsys.readouterr().err

    def test_candidate_error_exit_code(self, tmp_path, capsys):
        exit_code = main(["--query", "oil", "--candidates", str(tmp_path / "missing.json")])

        assert exit_code == 1
        assert "Input Error" in capsys.readouterr().err

    def test_query_or_scan_required(self):
        with pytest.raises(SystemExit):
            main(["--candidates", str(JOB_LINES)])
