"""Trust-zone rules for the skatmoms packages, read from docs/trust_zone.md."""

from __future__ import annotations

import ast
import re
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
_DOC = _ROOT / "docs" / "trust_zone.md"

# Which zones each zone may import from.
_ALLOWED = {
    "Privileged": {"Privileged", "Pure"},
    "Orchestrator": {"Privileged", "Orchestrator", "Pure"},
    "Pure": {"Pure"},
}
# Tax rules take their inputs as arguments.
_PURE_FORBIDDEN = {"os", "sys", "pathlib", "urllib", "httpx", "tomllib", "tomli"}


def _zone_mapping() -> dict[str, str]:
    """Return ``{package: zone}`` from the Current Directory Mapping section."""
    section = _DOC.read_text(encoding="utf-8").split("Current Directory Mapping", 1)[1]
    section = section.split("Dependency Rules", 1)[0]

    mapping: dict[str, str] = {}
    zone: str | None = None
    for line in section.splitlines():
        match = re.match(r"^(\s*)-\s+`([^`]+)`", line)
        if not match:
            continue
        indent, token = match.groups()
        if not indent:
            zone = token
        elif zone is not None:
            mapping[token.strip("/")] = zone
    return mapping


def _packages() -> list[str]:
    return sorted(
        path.name
        for path in _ROOT.iterdir()
        if path.is_dir() and (path / "__init__.py").exists() and path.name != "tests"
    )


def _skatmoms_imports(path: Path) -> list[str]:
    """Absolute imports of the project's own packages, as package names."""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    modules: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            modules.append(node.module)
    return [module.split(".")[1] for module in modules if module.startswith("skatmoms.")]


def _all_imports(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    modules: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            modules.append("." * node.level + (node.module or ""))
    return modules


def test_zone_mapping_matches_layout() -> None:
    assert _zone_mapping() == {
        "runtime": "Privileged",
        "application": "Orchestrator",
        "cli": "Orchestrator",
        "domain": "Pure",
    }


def test_every_package_has_a_zone() -> None:
    mapping = _zone_mapping()
    unmapped = [name for name in _packages() if name not in mapping]
    assert not unmapped, f"Packages missing from {_DOC.name}: {unmapped}"


def test_imports_stay_within_allowed_zones() -> None:
    mapping = _zone_mapping()
    violations: list[str] = []

    for package, zone in mapping.items():
        for path in sorted((_ROOT / package).rglob("*.py")):
            for target in _skatmoms_imports(path):
                target_zone = mapping.get(target)
                if target_zone is not None and target_zone not in _ALLOWED[zone]:
                    violations.append(f"{path.relative_to(_ROOT)}: {zone} imports skatmoms.{target} ({target_zone})")

    assert not violations, "Trust-zone import violations:\n" + "\n".join(violations)


def test_runtime_never_imports_workflows() -> None:
    violations = [
        f"{path.relative_to(_ROOT)}: skatmoms.{target}"
        for path in sorted((_ROOT / "runtime").rglob("*.py"))
        for target in _skatmoms_imports(path)
        if target in {"application", "cli"}
    ]
    assert not violations, "Runtime imports orchestration code:\n" + "\n".join(violations)


def test_domain_does_no_io() -> None:
    violations: list[str] = []
    for path in sorted((_ROOT / "domain").rglob("*.py")):
        for module in _all_imports(path):
            if module.split(".")[0] in _PURE_FORBIDDEN:
                violations.append(f"{path.relative_to(_ROOT)}: import {module}")
        if "environ" in path.read_text(encoding="utf-8"):
            violations.append(f"{path.relative_to(_ROOT)}: reads the environment")
    assert not violations, "Domain I/O violations:\n" + "\n".join(violations)
