"""Shared fixtures: settings files and a requests session with mocked HTTP verbs."""

import json
import logging
from unittest.mock import Mock

import pytest
import requests

SETTINGS = {
    "base_url": "https://ctrl",
    "login": "u",
    "password": "p",
    "device_id": "dev1",
    "port_profile_up": "PROF_UP",
    "port_profile_down": "PROF_DOWN",
}


@pytest.fixture
def settings_values() -> dict:
    """The settings of the reference scenario."""
    return dict(SETTINGS)


@pytest.fixture
def write_settings(tmp_path):
    """Write a settings mapping to a file; JSON when the name ends in .json."""

    def _write(values: dict, name: str = "unifi.conf"):
        path = tmp_path / name
        if name.endswith(".json"):
            path.write_text(json.dumps(values), encoding="utf-8")
        else:
            lines = [f'{key} = "{value}"' for key, value in values.items()]
            path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_response():
    """Build a fake controller response carrying a meta envelope."""

    def _make(rc: str, msg: str = None, status_code: int = 200):
        meta = {"rc": rc}
        if msg is not None:
            meta["msg"] = msg
        response = Mock()
        response.status_code = status_code
        response.json.return_value = {"meta": meta, "data": []}
        return response

    return _make


@pytest.fixture
def session():
    """A real requests.Session whose HTTP verbs are mocked."""
    s = requests.Session()
    s.post = Mock()
    s.put = Mock()
    return s


@pytest.fixture(autouse=True)
def close_log_handlers():
    """Close the handlers installed by utils.setup_logging after each test."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
