#!/usr/bin/env python3
"""
Fail if zendesk_mcp.core reaches outside the transport-agnostic layer.

core/ may use httpx, pydantic, python-dotenv and ``mcp.types``. It must not
import the MCP server runtime, the web stack, the protocol host adapter
(``zendesk_mcp.server``) or any transport. Relative imports are resolved
against the importing module so ``from ..server import x`` is caught too.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = REPO_ROOT / "src"
CORE_DIR = SRC_DIR / "zendesk_mcp" / "core"

FORBIDDEN_PREFIXES = (
    "mcp.server",
    "starlette",
    "uvicorn",
    "zendesk_mcp.server",
    "zendesk_mcp.transports",
)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def module_name(path: Path, src_dir: Path = SRC_DIR) -> str:
    parts = list(path.relative_to(src_dir).with_suffix("").parts)
    if parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def resolve_from(node: ast.ImportFrom, current: str, is_package: bool) -> str:
    if not node.level:
        return node.module or ""
    base = current.split(".")
    # A module's level-1 anchor is its package; a package's is itself.
    drop = node.level - 1 if is_package else node.level
    anchor = base[: len(base) - drop] if drop else base
    return ".".join(anchor + ([node.module] if node.module else []))


def scan_file(path: Path, src_dir: Path = SRC_DIR) -> list[str]:
    errors: list[str] = []
    current = module_name(path, src_dir)
    is_package = path.name == "__init__.py"
    tree = ast.parse(path.read_text(), filename=str(path))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            targets = [alias.name for alias in node.names]
        elif isinstance(node, ast.ImportFrom):
            base = resolve_from(node, current, is_package)
            # `from zendesk_mcp import server` names the module in the alias
            targets = [base] + [f"{base}.{alias.name}" for alias in node.names]
        else:
            continue
        for mod in targets:
            if mod and is_forbidden(mod):
                errors.append(f"{path}:{node.lineno}: forbidden import '{mod}'")
                break
    return errors


def main(core_dir: Path = CORE_DIR) -> int:
    violations: list[str] = []
    for py_file in sorted(core_dir.rglob("*.py")):
        violations.extend(scan_file(py_file, core_dir.parent.parent))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
