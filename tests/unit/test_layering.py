"""
Layering rules.

The domain layer stays free of persistence, transport and framework
imports; the application layer reaches infrastructure only via interfaces.
"""
import ast
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]


def imported_modules(package: str):
    """Yield (file, module) for every absolute import under a package directory."""
    for path in sorted((ROOT / package).rglob("*.py")):
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    yield path.relative_to(ROOT), alias.name
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                yield path.relative_to(ROOT), node.module


@pytest.mark.parametrize(
    "forbidden",
    ["sqlalchemy", "pydantic", "fastapi", "aiohttp", "core.application", "core.data", "core.infrastructure"],
)
def test_domain_is_pure(forbidden):
    violations = [
        f"{path}: {module}"
        for path, module in imported_modules("core/domain")
        if module == forbidden or module.startswith(forbidden + ".")
    ]
    assert violations == []


def test_application_uses_no_adapters():
    violations = [
        f"{path}: {module}"
        for path, module in imported_modules("core/application")
        if module.startswith("core.infrastructure.adapters") or module == "aiohttp"
    ]
    assert violations == []
