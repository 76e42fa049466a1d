"""
Tests for the CAT simulation CLI.
"""
import json
from unittest.mock import patch

from scripts.run_cat_simulation import main, parse_args

SMALL_RUN = ["--examinees", "5", "--highest-level", "20", "--starting-level", "10"]


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.examinees == 500
        assert args.standard_error == 10.0
        assert args.json is False


class TestMain:
    @patch("adaptivequiz.core.logging_config.setup_logging")
    def test_text_report(self, mock_setup, capsys):
        assert main(SMALL_RUN) == 0
        assert "CAT Simulation Report" in capsys.readouterr().out
        mock_setup.assert_called_once()

    @patch("adaptivequiz.core.logging_config.setup_logging")
    def test_json_report(self, mock_setup, capsys):
        assert main(SMALL_RUN + ["--json"]) == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["config"]["n_examinees"] == 5
        assert sum(summary["stopping_reason_counts"].values()) == 5

    @patch("adaptivequiz.core.logging_config.setup_logging")
    def test_invalid_examinee_count_exits_with_error(self, mock_setup):
        assert main(["--examinees", "0"]) == 2
