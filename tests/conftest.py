import os
import sys
import importlib
import pytest
from pathlib import Path

# Remove working dir to avoid importing the un-installed idlbind install
try:
    sys.path.remove(os.getcwd())
except ValueError:
    pass

# Allow the import of support modules for tests
sys.path.append(str(Path(__file__).resolve().parent))

from idlbind import GeneratorConfig, generate


class GeneratedCode:
    """Writes the units of a tree below a temporary directory and imports
    them like any installed package."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def write(self, roots, config: GeneratorConfig = None):
        config = (config or GeneratorConfig()).evolve(output_directory=str(self.root))
        return generate(roots, config)

    def source(self, path: str) -> str:
        return (self.root / path).read_text(encoding="utf-8")

    def module(self, name: str):
        return importlib.import_module(name)

    def entity(self, module: str):
        return getattr(self.module(module), module.rsplit(".", 1)[-1])


def _forget_modules_below(root: Path) -> None:
    prefix = str(root)
    doomed = []
    for name, module in list(sys.modules.items()):
        origin = getattr(module, "__file__", None) or ""
        paths = [str(p) for p in (getattr(module, "__path__", None) or [])]
        if origin.startswith(prefix) or any(p.startswith(prefix) for p in paths):
            doomed.append(name)
    for name in doomed:
        sys.modules.pop(name, None)


@pytest.fixture
def generated(tmp_path, monkeypatch) -> GeneratedCode:
    root = tmp_path / "out"
    root.mkdir()
    monkeypatch.syspath_prepend(str(root))
    yield GeneratedCode(root)
    _forget_modules_below(root)
    importlib.invalidate_caches()
