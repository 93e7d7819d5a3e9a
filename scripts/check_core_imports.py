#!/usr/bin/env python3
"""
Fail if core imports resource services.
Services are built on top of core's RequestDoer; core must not know them.
Checks all Python files under src/opsmngr/core/.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "opsmngr" / "core"

FORBIDDEN_PREFIXES = ("opsmngr.services",)
FORBIDDEN_RELATIVE = ("services",)


def is_forbidden(module: str, level: int = 0) -> bool:
    if level:
        head = module.split(".", 1)[0] if module else ""
        # ..services from inside core
        return level >= 2 and head in FORBIDDEN_RELATIVE
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if is_forbidden(alias.name):
                    errors.append(f"{path}: forbidden import '{alias.name}'")
        elif isinstance(node, ast.ImportFrom):
            mod = node.module or ""
            if is_forbidden(mod, node.level):
                errors.append(f"{path}: forbidden import '{'.' * node.level}{mod}'")
    return errors


def main() -> int:
    violations: list[str] = []
    for py_file in CORE_DIR.rglob("*.py"):
        violations.extend(scan_file(py_file))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
