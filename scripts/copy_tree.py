"""Copy a directory tree."""

from __future__ import annotations

import json
import sys

import yaml

from local_fs.copy import copy_recursively
from local_fs.logger import install_exception_hooks, setup_logging
from local_fs.types import CopyOptions

_FLAGS = {
    "--replace-existing": "replace_existing",
    "--copy-attributes": "copy_attributes",
    "--nofollow-links": "nofollow_links",
}


def main() -> None:
    setup_logging()
    install_exception_hooks()
    args = [a for a in sys.argv[1:] if a != "--yaml"]
    as_yaml = len(args) != len(sys.argv) - 1
    positional = [a for a in args if not a.startswith("--")]

    if len(positional) != 2:
        flags = " ".join(f"[{flag}]" for flag in _FLAGS)
        print(f"Usage: python scripts/copy_tree.py <from> <to> {flags} [--yaml]", file=sys.stderr)
        sys.exit(1)

    options = CopyOptions(**{field: True for flag, field in _FLAGS.items() if flag in args})
    source, dest = positional

    try:
        target = copy_recursively(source, dest, options)
        data = {"success": True, "source": source, "dest": str(target), "options": options.model_dump()}
    except OSError as err:
        data = {"success": False, "source": source, "dest": dest, "error": str(err)}

    print(yaml.safe_dump(data, sort_keys=False) if as_yaml else json.dumps(data, indent=2))

    if not data["success"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
