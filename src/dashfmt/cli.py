"""Command-line interface for dashfmt.

Reads one robtop record per line from a file or stdin and writes either the
normalized record or, with --json, the decoded record as a JSON object.
"""

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import sys
from typing import IO, ContextManager

from .errors import DashError
from .models.creator import Creator
from .models.level import Level
from .models.profile import Profile
from .models.song import NewgroundsSong
from .models.user import SearchedUser
from .normalize import decode_lines, normalize_lines
from .records import DUPLICATE_POLICIES

KINDS = {
    "creator": Creator,
    "level": Level,
    "profile": Profile,
    "song": NewgroundsSong,
    "user": SearchedUser,
}


def _open_lines(path: str) -> ContextManager[IO[str]]:
    if path == "-":
        return contextlib.nullcontext(sys.stdin)
    return open(path, "r", encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="dashfmt", description="Normalize or decode robtop records.")
    p.add_argument("path", nargs="?", default="-", help="Input file path or '-' for stdin")
    p.add_argument("--kind", choices=sorted(KINDS), required=True, help="Record type of every line")
    p.add_argument("--json", action="store_true", help="Print decoded records as JSON, one per line")
    p.add_argument("--duplicates", choices=DUPLICATE_POLICIES, default="last",
                   help="Which occurrence of a repeated tag to keep")
    p.add_argument("-v", "--verbose", action="store_true", help="Log discarded fields to stderr")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    kind = KINDS[args.kind]

    try:
        with _open_lines(args.path) as fh:
            if args.json:
                out = [json.dumps(d) for d in decode_lines(fh, kind, args.duplicates)]
            else:
                out = normalize_lines(fh, kind, args.duplicates)
    except (DashError, OSError, UnicodeDecodeError) as ex:
        sys.stderr.write(f"error: {ex}\n")
        return 2

    for line in out:
        sys.stdout.write(line + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
