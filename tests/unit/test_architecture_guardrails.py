import ast
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

ROOT = Path(__file__).resolve().parents[2]
SRC_ROOT = ROOT / "src" / "narcolife"

FORBIDDEN_LAYER_IMPORTS = {
    "domain": {"application", "infrastructure", "presentation"},
    "application": {"infrastructure", "presentation"},
}
ADAPTER_LIBRARIES = {"sqlalchemy", "rich", "dotenv"}


def _module_name(path: Path) -> str:
    return ".".join(path.relative_to(ROOT / "src").with_suffix("").parts)


def _layer(module: str) -> str | None:
    parts = module.split(".")
    if len(parts) > 2 and parts[0] == "narcolife":
        return parts[1]
    return None


def _imported_names(tree: ast.AST) -> list[str]:
    names: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            names.append(node.module)
    return names


def _load_imports() -> dict[str, list[str]]:
    return {
        _module_name(path): _imported_names(ast.parse(path.read_text(encoding="utf-8")))
        for path in sorted(SRC_ROOT.rglob("*.py"))
    }


def _project_graph(imports: dict[str, list[str]]) -> dict[str, set[str]]:
    graph: dict[str, set[str]] = {}
    for module, names in imports.items():
        graph[module] = {name for name in names if name in imports and name != module}
    return graph


def _find_cycle(graph: dict[str, set[str]]) -> list[str]:
    visiting: list[str] = []
    done: set[str] = set()

    def walk(node: str) -> list[str]:
        if node in visiting:
            return visiting[visiting.index(node):] + [node]
        if node in done:
            return []
        visiting.append(node)
        for target in sorted(graph[node]):
            cycle = walk(target)
            if cycle:
                return cycle
        visiting.pop()
        done.add(node)
        return []

    for node in sorted(graph):
        cycle = walk(node)
        if cycle:
            return cycle
    return []


class ArchitectureGuardrailTests(unittest.TestCase):
    def test_layers_only_import_inward(self) -> None:
        violations: list[str] = []
        for module, names in _load_imports().items():
            forbidden = FORBIDDEN_LAYER_IMPORTS.get(_layer(module), set())
            for name in names:
                if _layer(name) in forbidden:
                    violations.append(f"{module} -> {name}")

        self.assertEqual([], violations, "Inner layer imports an outer layer")

    def test_domain_layer_has_no_adapter_libraries(self) -> None:
        violations: list[str] = []
        for module, names in _load_imports().items():
            if _layer(module) != "domain":
                continue
            violations.extend(f"{module} imports {name}" for name in names if name.split(".")[0] in ADAPTER_LIBRARIES)

        self.assertEqual([], violations, "Domain layer depends on adapter libraries")

    def test_presentation_goes_through_game_service(self) -> None:
        violations: list[str] = []
        for module, names in _load_imports().items():
            if _layer(module) != "presentation":
                continue
            violations.extend(f"{module} -> {name}" for name in names if _layer(name) == "infrastructure")

        self.assertEqual([], violations, "Presentation reaches storage directly")

    def test_project_import_graph_has_no_cycles(self) -> None:
        cycle = _find_cycle(_project_graph(_load_imports()))
        self.assertEqual([], cycle, f"Import cycle detected: {' -> '.join(cycle)}")

    def test_layer_detection(self) -> None:
        self.assertEqual("domain", _layer("narcolife.domain.models.character"))
        self.assertIsNone(_layer("narcolife.bootstrap"))
        self.assertIsNone(_layer("sqlalchemy.orm"))


if __name__ == "__main__":
    unittest.main()
