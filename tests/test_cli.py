"""Tests for the pearchannel command line entry point."""

import json
from unittest.mock import patch

import pytest

import pearchannel
from args import parse_args
from constants import ExitCodes
from registry.pear.fetcher import DocumentFetcher
from registry.pear.channel import ChannelReader

from conftest import FakeTransport


def run_main(argv):
    with pytest.raises(SystemExit) as excinfo:
        pearchannel.main(argv)
    return excinfo.value.code


class TestParseArgs:
    """Test CLI argument parsing."""

    def test_defaults(self):
        ns = parse_args(["pear.php.net"])
        assert ns.URL == "pear.php.net"
        assert ns.OUTPUT is None
        assert ns.REST_VERSIONS is None
        assert ns.LOG_LEVEL == "INFO"

    def test_rest_versions_are_repeatable(self):
        ns = parse_args(["pear.php.net", "-r", "REST1.1", "-r", "REST1.0"])
        assert ns.REST_VERSIONS == ["REST1.1", "REST1.0"]


class TestMain:
    """Test main() against fixture channels."""

    @pytest.fixture
    def fixture_reader(self, channel_documents):
        def factory(preference=None):
            return ChannelReader(DocumentFetcher(FakeTransport(channel_documents)), preference=preference)
        with patch("pearchannel.ChannelReader", side_effect=factory) as mock_reader:
            yield mock_reader

    def test_prints_summary(self, fixture_reader, capsys):
        assert run_main(["pear.1.0.net"]) == ExitCodes.SUCCESS.value

        assert capsys.readouterr().out.splitlines() == ["pear-pear.net/HTTP_Client 1.2.1 (1.2.1.0)"]

    def test_exports_json(self, fixture_reader, tmp_path):
        output = tmp_path / "packages.json"

        assert run_main(["pear.1.1.net", "-o", str(output)]) == ExitCodes.SUCCESS.value

        data = json.loads(output.read_text(encoding="utf-8"))
        assert [entry["name"] for entry in data] == [
            "pear-pear.net/HTTP_Client",
            "pear-pear.net/HTTP_Client",
            "pear-pear.net/HTTP_Request",
        ]

    def test_export_is_byte_identical_across_runs(self, fixture_reader, tmp_path):
        first, second = tmp_path / "a.json", tmp_path / "b.json"

        run_main(["pear.1.1.net", "-o", str(first)])
        run_main(["pear.1.1.net", "-o", str(second)])

        assert first.read_bytes() == second.read_bytes()

    def test_rest_version_flag_reaches_reader(self, fixture_reader):
        run_main(["pear.1.1.net", "-r", "REST1.0"])

        fixture_reader.assert_called_once_with(preference=["REST1.0"])

    def test_unsupported_protocol_exit_code(self, fixture_reader):
        assert run_main(["legacy.net"]) == ExitCodes.PROTOCOL_ERROR.value

    def test_connection_error_exit_code(self, fixture_reader):
        assert run_main(["unknown.example"]) == ExitCodes.CONNECTION_ERROR.value

    def test_invalid_url_exit_code(self):
        assert run_main(["http://"]) == ExitCodes.FILE_ERROR.value

    def test_unwritable_output(self, fixture_reader, tmp_path):
        output = tmp_path / "missing-dir" / "out.json"

        assert run_main(["pear.1.0.net", "-o", str(output)]) == ExitCodes.FILE_ERROR.value
