"""Delete a directory tree."""

from __future__ import annotations

import json
import sys

import yaml

from local_fs.delete import delete_recursively
from local_fs.logger import install_exception_hooks, setup_logging
from local_fs.types import DeleteOptions


def main() -> None:
    setup_logging()
    install_exception_hooks()
    args = [a for a in sys.argv[1:] if a != "--yaml"]
    as_yaml = len(args) != len(sys.argv) - 1
    positional = [a for a in args if not a.startswith("--")]

    if len(positional) != 1:
        print("Usage: python scripts/delete_tree.py <path> [--follow-links] [--yaml]", file=sys.stderr)
        sys.exit(1)

    path = positional[0]
    options = DeleteOptions(nofollow_links="--follow-links" not in args)

    try:
        delete_recursively(path, options)
        data = {"success": True, "path": path}
    except OSError as err:
        data = {"success": False, "path": path, "error": str(err)}

    print(yaml.safe_dump(data, sort_keys=False) if as_yaml else json.dumps(data, indent=2))

    if not data["success"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
