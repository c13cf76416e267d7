"""Install the node dependencies of a freshly generated project."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from .errors import InstallError

__all__ = ["install_command", "install_dependencies"]

LOGGER = logging.getLogger(__name__)


def install_command(which: Callable[[str], str | None] = shutil.which) -> list[str]:
    """Return the install command, preferring yarn over npm."""

    if which("yarn"):
        return ["yarn", "install"]
    if which("npm"):
        return ["npm", "install"]
    raise InstallError("neither yarn nor npm is available on PATH")


def install_dependencies(
    directory: str | Path,
    *,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    which: Callable[[str], str | None] = shutil.which,
) -> Sequence[str]:
    """Run the package manager inside ``directory`` and return the command used."""

    command = install_command(which)
    LOGGER.info("installing dependencies with %s", " ".join(command))
    try:
        runner(command, cwd=str(directory), check=True)
    except subprocess.CalledProcessError as exc:
        raise InstallError(f"{' '.join(command)} exited with status {exc.returncode}") from exc
    except OSError as exc:
        raise InstallError(f"could not run {command[0]}: {exc}") from exc
    return command
