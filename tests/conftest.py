"""Shared fixtures: a loopback stand-in for the daemon's monitoring socket."""

import json
import socket
import socketserver
import sys
import threading
from pathlib import Path
from typing import List, Optional

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeDaemon:
    """Accepts connections on 127.0.0.1, records each request, sends a canned reply.

    A reply of None closes the connection without answering.
    """

    def __init__(self, reply: Optional[bytes]):
        self.reply = reply
        self.requests: List[bytes] = []
        daemon = self

        class Handler(socketserver.BaseRequestHandler):
            def handle(self):
                daemon.requests.append(self.request.recv(1024))
                if daemon.reply is not None:
                    self.request.sendall(daemon.reply)

        self.server = socketserver.TCPServer(("127.0.0.1", 0), Handler)
        self.host, self.port = self.server.server_address
        self._thread = threading.Thread(target=self.server.serve_forever, daemon=True)

    def start(self) -> "FakeDaemon":
        self._thread.start()
        return self

    def stop(self) -> None:
        self.server.shutdown()
        self.server.server_close()
        self._thread.join(timeout=5)


@pytest.fixture
def fake_daemon():
    """Factory fixture: fake_daemon(reply) starts a daemon answering with reply."""
    daemons = []

    def start(reply):
        if isinstance(reply, dict):
            reply = json.dumps(reply).encode()
        daemon = FakeDaemon(reply).start()
        daemons.append(daemon)
        return daemon

    yield start

    for daemon in daemons:
        daemon.stop()


@pytest.fixture
def closed_port():
    """A loopback port nothing listens on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def full_reply():
    """A status reply carrying every section."""
    return {
        "disciplining": {
            "status": "TRACKING",
            "tracking_only": False,
            "current_phase_convergence_count": 40,
            "valid_phase_convergence_threshold": 100,
            "convergence_progress": 40.0,
            "ready_for_holdover": False,
        },
        "oscillator": {
            "model": "mRO50",
            "fine_ctrl": 2048,
            "coarse_ctrl": 123456,
            "lock": True,
            "temperature": 45.25,
        },
        "clock": {"class": "Lock", "offset": -12},
        "gnss": {
            "fix": 3,
            "fixOk": True,
            "antenna_status": 2,
            "antenna_power": 1,
            "survey_in_position_error": 1.5,
            "lsChange": 0,
            "leap_seconds": 18,
        },
        "disciplining_parameters": {
            "calibration_parameters": {
                "ctrl_nodes_length": 3,
                "ctrl_load_nodes": "0.25,0.5,0.75",
                "ctrl_drift_coeffs": "1.2,0.0,-1.2",
                "coarse_equilibrium": 3500000,
                "calibration_date": 1655114400,
                "calibration_valid": True,
                "ctrl_nodes_length_factory": 3,
                "ctrl_load_nodes_factory": "0.25,0.5,0.75",
                "ctrl_drift_coeffs_factory": "1.0,0.0,-1.0",
                "coarse_equilibrium_factory": 3499000,
                "estimated_equilibrium_ES": 3500100,
            },
            "temperature_table": {"-10_to_0": "1.23", "0_to_10": "2.34"},
        },
        "action_requested": "read_eeprom",
    }
