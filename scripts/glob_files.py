"""Print the entries matching a glob pattern."""

from __future__ import annotations

import json
import re
import sys

import yaml

from local_fs.glob import glob
from local_fs.logger import install_exception_hooks, setup_logging


def main() -> None:
    setup_logging()
    install_exception_hooks()
    args = [a for a in sys.argv[1:] if a != "--yaml"]
    as_yaml = len(args) != len(sys.argv) - 1

    if len(args) < 1:
        print("Usage: python scripts/glob_files.py <pattern> [root] [--yaml]", file=sys.stderr)
        sys.exit(1)

    pattern = args[0]
    root = args[1] if len(args) > 1 else None

    try:
        matches = glob(pattern, root)
    except re.error as err:
        print(f"Invalid pattern {pattern!r}: {err}", file=sys.stderr)
        sys.exit(1)

    data = {"pattern": pattern, "matches": [str(m) for m in matches]}
    print(yaml.safe_dump(data, sort_keys=False) if as_yaml else json.dumps(data, indent=2))


if __name__ == "__main__":
    main()
