#!/usr/bin/env python3
"""
Fail CI on bare `except:` in the viewops package (or the given paths).

- Scans only *.py.
- Matches Python syntax line:  ^\s*except\s*:\s*(#.*)?$
- Optional whitelist file: lines of "relative/path.py:LINENO"

Usage:
    python tools/check_no_bare_except.py
    python tools/check_no_bare_except.py --paths viewops tools
"""

from __future__ import annotations

import argparse
import os
import re
import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple


BARE_EXCEPT_RE = re.compile(r"^\s*except\s*:\s*(#.*)?$")

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DEFAULT_PATHS = [os.path.join(REPO_ROOT, "viewops")]


@dataclass(frozen=True)
class Hit:
    path: str
    lineno: int
    line: str

    def __str__(self) -> str:
        return f"{self.path}:{self.lineno}: {self.line.strip()}"


def _iter_py_files(target: str) -> Iterable[str]:
    if os.path.isfile(target):
        if target.endswith(".py"):
            yield target
        return

    for root, dirs, files in os.walk(target):
        dirs[:] = [d for d in dirs if d != "__pycache__"]
        for fn in files:
            if fn.endswith(".py"):
                yield os.path.join(root, fn)


def load_whitelist(path: Optional[str]) -> Set[Tuple[str, int]]:
    if not path or not os.path.exists(path):
        return set()

    allowed: Set[Tuple[str, int]] = set()
    with open(path, "r", encoding="utf-8") as f:
        for raw in f:
            s = raw.strip()
            if not s or s.startswith("#"):
                continue
            p, sep, n = s.rpartition(":")
            if not sep or not n.isdigit():
                raise SystemExit(f"Invalid whitelist line (expected path:lineno): {s}")
            allowed.add((p.replace("\\", "/"), int(n)))
    return allowed


def _rel(path: str, root: str) -> str:
    return os.path.relpath(path, root).replace("\\", "/")


def scan(paths: Optional[List[str]] = None, whitelist: Optional[Set[Tuple[str, int]]] = None,
         root: str = REPO_ROOT) -> List[Hit]:
    """Bare-except hits under paths, as repo-relative locations."""
    whitelist = whitelist or set()
    files: Set[str] = set()
    for p in paths or DEFAULT_PATHS:
        if not os.path.exists(p):
            raise SystemExit(f"Path not found: {p}")
        files.update(_iter_py_files(p))

    hits: List[Hit] = []
    for p in sorted(files):
        rel = _rel(p, root)
        with open(p, "r", encoding="utf-8", errors="replace") as f:
            for idx, line in enumerate(f, start=1):
                if BARE_EXCEPT_RE.match(line) and (rel, idx) not in whitelist:
                    hits.append(Hit(path=rel, lineno=idx, line=line.rstrip("\n")))
    return hits


def main(argv: List[str]) -> int:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    ap.add_argument("--paths", nargs="+", default=None, help="Files/dirs to scan (default: viewops/)")
    ap.add_argument("--whitelist", default=None, help="Optional whitelist file path")
    args = ap.parse_args(argv)

    hits = scan(args.paths, load_whitelist(args.whitelist))

    if hits:
        print("ERROR: bare `except:` detected (must be `except Exception as e:` or narrower):")
        for h in hits:
            print(f"  {h}")
        print("")
        print("Fix: catch a named exception and record it on session.diag.")
        return 2

    print("OK: no bare `except:` found in scanned paths.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
