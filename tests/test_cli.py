"""
Tests for the command line surface and logging setup.
"""

import logging

import pytest

from roach import cli
from roach.client import IRRExplorerError
from roach.logger import BatchFormatter, BatchHandler, BatchReporter, progress_bar, setup_logging

from conftest import make_record


class FakeClient:
    instances = []

    def __init__(self, base_url=None, timeout=None):
        self.base_url = base_url
        self.timeout = timeout
        FakeClient.instances.append(self)

    def get_prefix_data(self, prefix):
        return [make_record(prefix=prefix, bgp=[64500])]

    def lookup(self, value):
        if value == "AS0":
            raise ValueError("Invalid input")
        if value == "AS666":
            raise IRRExplorerError("HTTP error! status: 502")
        return [make_record(prefix="192.0.2.0/24", bgp=[64500])]


@pytest.fixture(autouse=True)
def fake_client(monkeypatch):
    FakeClient.instances = []
    monkeypatch.setattr(cli, "IRRExplorerClient", FakeClient)
    return FakeClient


class TestBatchCommand:
    def test_success(self, tmp_path):
        src = tmp_path / "in.txt"
        dst = tmp_path / "out.csv"
        src.write_text("192.0.2.0/24\n198.51.100.0/24\n", encoding="utf-8")

        code = cli.main(["--delay", "0", "batch", str(src), str(dst)])

        assert code == 0
        assert dst.read_text(encoding="utf-8").splitlines() == [
            "subnet,origin,rpki",
            '"192.0.2.0/24",AS64500,unknown',
            '"198.51.100.0/24",AS64500,unknown',
        ]

    def test_validation_failure_exits_non_zero(self, tmp_path):
        src = tmp_path / "in.txt"
        src.write_text("AS15169\n", encoding="utf-8")

        code = cli.main(["batch", str(src), str(tmp_path / "out.csv")])

        assert code == 1
        assert not (tmp_path / "out.csv").exists()

    def test_missing_file_exits_non_zero(self, tmp_path):
        assert cli.main(["batch", str(tmp_path / "nope.txt"), str(tmp_path / "out.csv")]) == 1

    def test_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["batch", "only-input.txt"])
        assert exc.value.code == 2

    def test_timeout_flag_reaches_client(self, tmp_path):
        src = tmp_path / "in.txt"
        src.write_text("192.0.2.0/24\n", encoding="utf-8")
        cli.main(["--timeout", "3.5", "batch", str(src), str(tmp_path / "out.csv")])
        assert FakeClient.instances[-1].timeout == 3.5


class TestQueryCommand:
    def test_plain(self, capsys):
        assert cli.main(["--no-color", "query", "AS64500"]) == 0
        out = capsys.readouterr().out
        assert "Result 1 of 1" in out
        assert "Origins: AS64500(BGP)" in out

    def test_json(self, capsys):
        assert cli.main(["query", "192.0.2.0/24", "--json"]) == 0
        assert '"prefix": "192.0.2.0/24"' in capsys.readouterr().out

    def test_errors_exit_non_zero(self):
        assert cli.main(["query", "AS0"]) == 1
        assert cli.main(["query", "AS666"]) == 1


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--help"])
    assert exc.value.code == 0
    assert "roach batch" in capsys.readouterr().out


def test_no_command_runs_interactive(monkeypatch):
    seen = []

    class FakeSession:
        def __init__(self, client, palette=None):
            seen.append(client)

        def run(self):
            return 0

    monkeypatch.setattr(cli, "InteractiveSession", FakeSession)
    assert cli.main([]) == 0
    assert len(seen) == 1


class TestLogging:
    def test_setup_is_idempotent(self):
        setup_logging()
        log = setup_logging(debug=True)
        assert len([h for h in log.handlers if isinstance(h, BatchHandler)]) == 1
        assert log.level == logging.DEBUG

    def test_formatter(self):
        record = logging.LogRecord("roach.batch", logging.WARNING, __file__, 1, "careful", None, None)
        line = BatchFormatter(color=False).format(record)
        assert line.startswith("[")
        assert line.endswith("] WARN: careful")

    def test_formatter_colour(self):
        record = logging.LogRecord("roach.batch", logging.ERROR, __file__, 1, "boom", None, None)
        assert BatchFormatter(color=True).format(record).startswith("\x1b[31m[")

    def test_progress_bar(self):
        assert progress_bar(0) == "[" + "░" * 20 + "]"
        assert progress_bar(50) == "[" + "█" * 10 + "░" * 10 + "]"
        assert progress_bar(100) == "[" + "█" * 20 + "]"

    def test_reporter_summaries(self, caplog):
        reporter = BatchReporter()
        with caplog.at_level(logging.INFO, logger="roach"):
            reporter.validation_summary(3, 0)
            reporter.validation_summary(3, 2)
            reporter.processing_complete(7, 3)

        messages = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert messages == [
            (logging.INFO, "Validation complete: 3 valid entries found"),
            (logging.WARNING, "Validation complete: 3 valid, 2 invalid entries"),
            (logging.INFO, "Processing complete: 7 results from 3 entries"),
        ]
