# tests/test_docker.py
import pytest
import requests

from hostprep.errors import InstallerUnreachable, InstallFailed
from hostprep.lib import docker
from hostprep.steps import InstallRuntimeStep


@pytest.fixture
def systemctl(mocker, make_result):
    """Patch docker.run_cmd; 'systemctl is-enabled' reports the returned dict's value."""
    unit = {"enabled": "enabled"}
    calls = []

    def _run(argv, **kwargs):
        calls.append(list(argv))
        if argv[:2] == ["systemctl", "is-enabled"]:
            return make_result(stdout=unit["enabled"] + "\n", argv=argv)
        return make_result(argv=argv)

    mocker.patch("hostprep.lib.docker.run_cmd", side_effect=_run)
    unit["calls"] = calls
    return unit


def test_is_installed(mocker):
    mocker.patch("hostprep.lib.docker.which", return_value="/usr/bin/docker")
    assert docker.is_installed() is True
    mocker.patch("hostprep.lib.docker.which", return_value=None)
    assert docker.is_installed() is False


def test_install_docker_unreachable(mocker):
    """Test that an unreachable get.docker.com fails before anything runs."""
    mocker.patch("hostprep.lib.docker.probe", return_value=False)
    run_script = mocker.patch("hostprep.lib.docker.run_script")

    with pytest.raises(InstallerUnreachable):
        docker.install_docker("https://get.docker.com", version="18.09.2")
    run_script.assert_not_called()


def test_install_docker_download_error(mocker):
    mocker.patch("hostprep.lib.docker.probe", return_value=True)
    mocker.patch("hostprep.lib.docker.fetch_text", side_effect=requests.exceptions.HTTPError("503"))

    with pytest.raises(InstallerUnreachable):
        docker.install_docker("https://get.docker.com", version="18.09.2")


def test_install_docker_pipes_script_with_version(mocker, make_result):
    mocker.patch("hostprep.lib.docker.probe", return_value=True)
    mocker.patch("hostprep.lib.docker.fetch_text", return_value="#!/bin/sh\necho docker\n")
    run_script = mocker.patch("hostprep.lib.docker.run_script", return_value=make_result())

    docker.install_docker("https://get.docker.com", version="18.09.2")

    run_script.assert_called_once_with(
        "#!/bin/sh\necho docker\n", ["sh"], env={"VERSION": "18.09.2"}, dry_run=False
    )


def test_install_docker_script_failure(mocker, make_result):
    mocker.patch("hostprep.lib.docker.probe", return_value=True)
    mocker.patch("hostprep.lib.docker.fetch_text", return_value="exit 1\n")
    mocker.patch("hostprep.lib.docker.run_script", return_value=make_result(returncode=1))

    with pytest.raises(InstallFailed):
        docker.install_docker("https://get.docker.com", version="18.09.2")


def test_ensure_enabled_at_boot_noop_when_enabled(systemctl):
    assert docker.ensure_enabled_at_boot() is False
    assert ["systemctl", "enable", "docker"] not in systemctl["calls"]


def test_ensure_enabled_at_boot_enables(systemctl):
    systemctl["enabled"] = "disabled"
    assert docker.ensure_enabled_at_boot() is True
    assert ["systemctl", "enable", "docker"] in systemctl["calls"]


def test_storage_driver(mocker, make_result):
    mocker.patch("hostprep.lib.docker.run_cmd", return_value=make_result(stdout="overlay2\n"))
    assert docker.storage_driver() == "overlay2"
    mocker.patch("hostprep.lib.docker.run_cmd", return_value=make_result(returncode=1))
    assert docker.storage_driver() is None


def test_runtime_step_skips_when_installed(mocker, systemctl, state):
    """Test that an existing docker binary skips the installer entirely."""
    mocker.patch("hostprep.lib.docker.which", return_value="/usr/bin/docker")
    install = mocker.patch("hostprep.lib.docker.install_docker")

    InstallRuntimeStep().run(state)

    install.assert_not_called()
    assert state["execution"]["decisions"]["docker_installed"] is False


def test_runtime_step_installs_and_starts(mocker, systemctl, state):
    mocker.patch("hostprep.lib.docker.which", return_value=None)
    install = mocker.patch("hostprep.lib.docker.install_docker")

    InstallRuntimeStep().run(state)

    install.assert_called_once()
    assert install.call_args.kwargs["version"] == "18.09.2"
    assert ["systemctl", "start", "docker"] in systemctl["calls"]
    assert state["execution"]["decisions"]["docker_installed"] is True
