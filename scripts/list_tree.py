"""List every directory and file under a root."""

from __future__ import annotations

import json
import sys

import yaml

from local_fs.logger import install_exception_hooks, setup_logging
from local_fs.walk import recursive_files_and_directories


def main() -> None:
    logger = setup_logging()
    install_exception_hooks()
    args = [a for a in sys.argv[1:] if a != "--yaml"]
    as_yaml = len(args) != len(sys.argv) - 1
    positional = [a for a in args if not a.startswith("--")]

    if len(positional) != 1:
        print("Usage: python scripts/list_tree.py <dir> [--nofollow-links] [--yaml]", file=sys.stderr)
        sys.exit(1)

    nofollow_links = "--nofollow-links" in args
    root = positional[0]

    listing = recursive_files_and_directories(root, nofollow_links=nofollow_links)
    logger.info("Listed tree", root=root, directories=len(listing.directories), files=len(listing.files))

    data = listing.model_dump(mode="json")
    print(yaml.safe_dump(data, sort_keys=False) if as_yaml else json.dumps(data, indent=2))


if __name__ == "__main__":
    main()
