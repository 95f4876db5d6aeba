# tests/test_pkg.py
from hostprep.lib import pkg


def test_install_packages_apt(mocker, make_result):
    mocker.patch("hostprep.lib.pkg.which", side_effect=lambda name: "/usr/bin/apt-get" if name == "apt-get" else None)
    run = mocker.patch("hostprep.lib.pkg.run_cmd", return_value=make_result())

    assert pkg.install_packages(["net-tools"]) is True

    argvs = [c.args[0] for c in run.call_args_list]
    assert argvs == [["apt-get", "update"], ["apt-get", "install", "-y", "net-tools"]]


def test_install_packages_yum(mocker, make_result):
    mocker.patch("hostprep.lib.pkg.which", side_effect=lambda name: "/usr/bin/yum" if name == "yum" else None)
    run = mocker.patch("hostprep.lib.pkg.run_cmd", return_value=make_result())

    assert pkg.install_packages(["net-tools"]) is True
    run.assert_called_once_with(["yum", "-y", "install", "net-tools"], check=False, dry_run=False)


def test_install_packages_no_manager(mocker):
    mocker.patch("hostprep.lib.pkg.which", return_value=None)
    assert pkg.install_packages(["net-tools"]) is False


def test_install_packages_failure(mocker, make_result):
    mocker.patch("hostprep.lib.pkg.which", return_value="/usr/bin/apt-get")
    mocker.patch("hostprep.lib.pkg.run_cmd", return_value=make_result(returncode=100, stderr="E: Unable"))
    assert pkg.install_packages(["net-tools"]) is False
