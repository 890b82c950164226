#!/usr/bin/env python3
"""
Tests for the command-line entry point (artmon_client.cli).
"""

import json

import pytest

from artmon_client.cli import build_parser, main
from artmon_common import config as artmon_config


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["-p", "2958"])
        assert args.port == "2958"
        assert args.address is None
        assert args.request is None

    def test_request_choices(self):
        args = build_parser().parse_args(["-p", "2958", "-r", "fake_holdover_start"])
        assert args.request == "fake_holdover_start"

    def test_unknown_request(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["-p", "2958", "-r", "reboot"])
        assert exc_info.value.code == 2

    def test_log_level_case_insensitive(self):
        args = build_parser().parse_args(["-p", "2958", "--log-level", "debug"])
        assert args.log_level == "DEBUG"

    def test_help_lists_requests(self, capsys):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-h"])
        out = capsys.readouterr().out
        assert "read_eeprom: read disciplining data from EEPROM" in out
        assert "mro_coarse_inc" in out


class TestMain:

    def test_success(self, fake_daemon, full_reply, capsys):
        daemon = fake_daemon(full_reply)

        status = main(["-a", "127.0.0.1", "-p", str(daemon.port), "-t", "2"])

        assert status == 0
        out = capsys.readouterr().out
        assert "Oscillator detected" in out
        assert "PASSED !" in out

    def test_request_sent(self, fake_daemon, capsys):
        daemon = fake_daemon({"action_requested": "gnss_stop"})

        status = main(["-a", "127.0.0.1", "-p", str(daemon.port), "-r", "gnss_stop", "-t", "2"])

        assert status == 0
        assert json.loads(daemon.requests[0]) == {"request": 3}
        assert "Action requested: gnss_stop" in capsys.readouterr().out

    def test_raw_reply_printed(self, fake_daemon, capsys):
        daemon = fake_daemon({"clock": {"class": "Lock", "offset": 5}})

        main(["-a", "127.0.0.1", "-p", str(daemon.port), "--raw", "-t", "2"])

        assert "Lock" in capsys.readouterr().out

    def test_missing_port(self, monkeypatch, capsys):
        monkeypatch.setattr(artmon_config, "port", None)

        assert main(["-a", "127.0.0.1"]) == 1
        out = capsys.readouterr().out
        assert "Bad port" in out
        assert "usage:" in out

    def test_port_from_config(self, fake_daemon, monkeypatch):
        daemon = fake_daemon({})
        monkeypatch.setattr(artmon_config, "port", str(daemon.port))

        assert main(["-a", "127.0.0.1", "-t", "2"]) == 0
        assert daemon.requests == [b'{"request":0}']

    def test_connection_failure(self, closed_port, capsys):
        status = main(["-a", "127.0.0.1", "-p", str(closed_port), "-t", "2"])

        assert status == 1
        out = capsys.readouterr().out
        assert "FAIL" in out
        assert "PASSED" not in out

    def test_malformed_reply(self, fake_daemon, capsys):
        daemon = fake_daemon(b"{not json")

        assert main(["-a", "127.0.0.1", "-p", str(daemon.port), "-t", "2"]) == 1
        out = capsys.readouterr().out
        assert "FAIL" in out
        assert "DECODE_ERROR" in out

    def test_deeply_nested_reply(self, fake_daemon, capsys):
        daemon = fake_daemon(b"[" * 2000)

        assert main(["-a", "127.0.0.1", "-p", str(daemon.port), "-t", "2"]) == 1
        assert "FAIL" in capsys.readouterr().out
