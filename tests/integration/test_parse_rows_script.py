"""
Integration tests for parse_rows.py script.

Runs the sample CloudFront log through the full parser stack, including
the real user-agent engine, gzip handling and CSV output.
"""

import gzip
import shutil
import sys
from pathlib import Path

import pandas as pd
import pytest

# Add src and scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "scripts"))

import parse_rows
from cloudfront_events.config import ParserSettings, clear_settings_cache
from cloudfront_events.serde import CloudFrontRowParser, ParseError


@pytest.fixture
def sample_log() -> Path:
    """Return path to the sample CloudFront log."""
    return Path(__file__).parent.parent / "fixtures" / "cloudfront" / "sample.log"


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run every test away from any real config.yaml."""
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestParseLogFile:
    """Tests for parse_log_file function."""

    def test_counts(self, sample_log):
        """Headers and query-less rows are skipped; the truncated row fails."""
        results = parse_rows.parse_log_file(CloudFrontRowParser(), sample_log)

        assert results["rows_read"] == 7
        assert len(results["records"]) == 3
        assert results["rows_skipped"] == 3
        assert results["rows_failed"] == 1
        assert "line 6" in results["errors"][0]

    def test_records(self, sample_log):
        """Referrer, tracker URL and missing URL cases all resolve."""
        results = parse_rows.parse_log_file(CloudFrontRowParser(), sample_log)
        desktop, mobile, bot = results["records"]

        assert desktop.dt == "2024-01-15"
        assert desktop.tm == "12:30:45"
        assert desktop.user_ipaddress == "192.0.2.100"
        assert desktop.page_url == "http://shop.example/products/42"
        assert desktop.br_group == "Chrome"
        assert desktop.br_type == "Browser"

        assert mobile.page_url == "http://shop.example/cart"
        assert mobile.br_type == "Mobile Browser"

        assert bot.page_url is None
        assert bot.br_type == "Robot"

    def test_fallback_base_url(self, sample_log):
        """A configured base URL fills in rows without any page URL."""
        parser = CloudFrontRowParser(
            settings=ParserSettings(fallback_base_url="https://shop.example/")
        )
        results = parse_rows.parse_log_file(parser, sample_log)

        assert results["records"][2].page_url == "https://shop.example/?e=pv&tv=js-0.5.0"

    def test_gzip_input(self, sample_log, tmp_path):
        """Gzip-compressed logs are read transparently."""
        gz_path = tmp_path / "sample.log.gz"
        with open(sample_log, "rb") as src, gzip.open(gz_path, "wb") as dst:
            shutil.copyfileobj(src, dst)

        results = parse_rows.parse_log_file(CloudFrontRowParser(), gz_path)

        assert len(results["records"]) == 3

    def test_fail_fast(self, sample_log):
        """fail_fast re-raises with the line number attached."""
        with pytest.raises(ParseError) as exc_info:
            parse_rows.parse_log_file(CloudFrontRowParser(), sample_log, fail_fast=True)

        assert exc_info.value.line_number == 6
        assert exc_info.value.line_content.startswith("2024-01-15\t12:30:48")


class TestMain:
    """Tests for the command-line entry point."""

    def test_writes_csv(self, sample_log, tmp_path, monkeypatch):
        """Records are written to CSV; the failed row sets the exit code."""
        output = tmp_path / "events.csv"
        monkeypatch.setattr(
            sys, "argv", ["parse_rows.py", "--input", str(sample_log), "--output", str(output)]
        )

        assert parse_rows.main() == 1

        df = pd.read_csv(output)
        assert len(df) == 3
        assert df["user_ipaddress"].tolist() == [
            "192.0.2.100",
            "192.0.2.101",
            "192.0.2.104",
        ]

    def test_clean_log_exits_zero(self, tmp_path, monkeypatch):
        """A log without failures exits 0."""
        log = tmp_path / "clean.log"
        log.write_text(
            "#Version: 1.0\n"
            "2020-01-01 00:00:00 EDGE1 1024 10.0.0.1 GET example.com /page 200 "
            "http://ref.example/ Mozilla/5.0 ?foo=bar\n"
        )
        monkeypatch.setattr(sys, "argv", ["parse_rows.py", "--input", str(log)])

        assert parse_rows.main() == 0

    def test_fail_fast_exit_code(self, sample_log, monkeypatch):
        """--fail-fast aborts on the malformed row with exit code 1."""
        monkeypatch.setattr(
            sys, "argv", ["parse_rows.py", "--input", str(sample_log), "--fail-fast"]
        )
        assert parse_rows.main() == 1

    def test_unknown_log_level_exits_one(self, sample_log, monkeypatch):
        """An unknown log level is reported as an invalid setting, not a crash."""
        monkeypatch.setenv("CF_SERDE_LOG_LEVEL", "BOGUS")
        monkeypatch.setattr(sys, "argv", ["parse_rows.py", "--input", str(sample_log)])

        assert parse_rows.main() == 1

    def test_numeric_log_level_from_config(self, tmp_path, monkeypatch):
        """A numeric logging.level in config.yaml is accepted."""
        (tmp_path / "config.yaml").write_text("logging:\n  level: 10\n")
        log = tmp_path / "clean.log"
        log.write_text(
            "2020-01-01 00:00:00 EDGE1 1024 10.0.0.1 GET example.com /page 200 "
            "http://ref.example/ Mozilla/5.0 ?foo=bar\n"
        )
        monkeypatch.setattr(sys, "argv", ["parse_rows.py", "--input", str(log)])

        assert parse_rows.main() == 0
