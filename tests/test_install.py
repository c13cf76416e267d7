from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from baumeister.errors import InstallError
from baumeister.install import install_command, install_dependencies


def _which(*available: str):
    return lambda name: f"/usr/bin/{name}" if name in available else None


def test_install_command_prefers_yarn():
    assert install_command(_which("yarn", "npm")) == ["yarn", "install"]
    assert install_command(_which("npm")) == ["npm", "install"]


def test_install_command_requires_a_package_manager():
    with pytest.raises(InstallError):
        install_command(_which())


def test_install_dependencies_runs_in_the_project(tmp_path: Path):
    calls = []

    def runner(command, **kwargs):
        calls.append((command, kwargs))
        return subprocess.CompletedProcess(command, 0)

    command = install_dependencies(tmp_path, runner=runner, which=_which("npm"))

    assert command == ["npm", "install"]
    assert calls == [(["npm", "install"], {"cwd": str(tmp_path), "check": True})]


def test_install_dependencies_reports_failures(tmp_path: Path):
    def runner(command, **kwargs):
        raise subprocess.CalledProcessError(1, command)

    with pytest.raises(InstallError, match="exited with status 1"):
        install_dependencies(tmp_path, runner=runner, which=_which("yarn"))
