"""local-fs constants."""

from __future__ import annotations

import os

FILE_SEPARATOR = os.sep
PATH_LIST_SEPARATOR = os.pathsep

# Root of a unix system, None on Windows
UNIX_ROOT: str | None = "/" if os.sep == "/" else None

DEFAULT_TEMP_PREFIX = "fs"
DEFAULT_TEMP_TRIES = 10

# Archive members extracted by extract_env_from_archive are decompressed when they match
ARCHIVE_SUFFIXES = (".gz", ".bz2", ".xz", ".zip")
