"""Shell helpers: run commands in a working directory and look up executables."""

from __future__ import annotations

import os
import subprocess
from typing import TYPE_CHECKING

from .constants import PATH_LIST_SEPARATOR
from .logger import logger
from .paths import base_dir
from .types import ExecResult

if TYPE_CHECKING:
    from .paths import StrPath


def exec_command(*args: str, cwd: StrPath | None = None, input: str | None = None) -> ExecResult:
    """Run a command (no shell) in ``cwd`` and capture its exit code and output."""
    directory = base_dir(cwd)
    logger.debug("Executing command", args=list(args), cwd=str(directory))
    result = subprocess.run(
        list(args),
        cwd=directory,
        input=input,
        capture_output=True,
        text=True,
        check=False,
    )
    return ExecResult(exit=result.returncode, out=result.stdout, err=result.stderr)


def which(bin_name: str) -> str | None:
    """Absolute path of the first ``bin_name`` on PATH (trying PATHEXT suffixes on Windows)."""
    paths = (os.environ.get("PATH") or "").split(PATH_LIST_SEPARATOR)
    pathexts = (os.environ.get("PATHEXT") or "").split(PATH_LIST_SEPARATOR)

    seen: set[str] = set()
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        for pathext in pathexts:
            exe_file = os.path.join(path, bin_name + pathext)
            if os.path.exists(exe_file):
                return os.path.abspath(exe_file)
    return None
