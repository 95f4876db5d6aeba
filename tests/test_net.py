# tests/test_net.py
import pytest
import requests

from hostprep.config import load_config
from hostprep.errors import NetworkUnreachable
from hostprep.lib.net import fetch_text, find_unreachable, probe
from hostprep.steps import ProbeNetworkStep


@pytest.fixture
def fake_get(mocker):
    """requests.get that refuses connections to URLs in the returned set."""
    down = set()

    def _get(url, **kwargs):
        if url in down:
            raise requests.exceptions.ConnectionError(f"refused: {url}")
        response = mocker.Mock()
        response.status_code = 403
        return response

    mocker.patch("hostprep.lib.net.requests.get", side_effect=_get)
    return down


def test_probe_counts_any_http_status_as_reachable(fake_get):
    assert probe("https://quay.io") is True


def test_probe_connection_error_is_unreachable(fake_get):
    fake_get.add("https://quay.io")
    assert probe("https://quay.io") is False


def test_probe_timeout_is_unreachable(mocker):
    mocker.patch("hostprep.lib.net.requests.get", side_effect=requests.exceptions.Timeout())
    assert probe("https://quay.io", timeout=1) is False


def test_find_unreachable_keeps_input_order_and_probes_everything(fake_get):
    """Test that all failures are collected, in input order, without failing fast."""
    urls = ["https://a.example", "https://b.example", "https://c.example", "https://d.example"]
    fake_get.update({"https://d.example", "https://b.example"})

    assert find_unreachable(urls) == ["https://b.example", "https://d.example"]


def test_find_unreachable_all_reachable(fake_get):
    assert find_unreachable(["https://a.example", "https://b.example"]) == []


def test_fetch_text_raises_on_http_error(mocker):
    response = mocker.Mock()
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
    mocker.patch("hostprep.lib.net.requests.get", return_value=response)

    with pytest.raises(requests.exceptions.HTTPError):
        fetch_text("https://get.docker.com")


def test_probe_step_reports_single_unreachable_endpoint(fake_get, state):
    """Test that one unreachable endpoint fails the step and is the only one listed."""
    fake_get.add("https://quay.io")

    with pytest.raises(NetworkUnreachable) as excinfo:
        ProbeNetworkStep().run(state)

    assert excinfo.value.endpoints == ["https://quay.io"]
    assert "FAILED: https://quay.io" in str(excinfo.value)
    assert state["execution"]["decisions"]["unreachable"] == ["https://quay.io"]


def test_probe_step_passes_when_all_reachable(fake_get, state):
    ProbeNetworkStep().run(state)
    assert state["execution"]["decisions"]["unreachable"] == []


def test_probe_step_uses_configured_endpoints(fake_get):
    cfg = load_config(endpoints=["https://x.example", "https://y.example"])
    fake_get.update({"https://x.example", "https://y.example"})

    with pytest.raises(NetworkUnreachable) as excinfo:
        ProbeNetworkStep().run({"config": cfg, "execution": {}})

    assert excinfo.value.endpoints == ["https://x.example", "https://y.example"]
