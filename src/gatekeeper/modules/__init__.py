"""Feature modules with auto-discovery.

Each module package exposes its ``router`` from ``routes.py``.
"""

from importlib import import_module
from pathlib import Path

import structlog
from fastapi import APIRouter


logger = structlog.get_logger()


def discover_modules() -> list[APIRouter]:
    """Auto-discover and return routers from all modules.

    Scans the modules directory for packages whose ``routes``
    submodule defines a ``router`` attribute.

    Returns:
        List of FastAPI routers from discovered modules, ordered by name.
    """
    modules_dir = Path(__file__).parent
    routers: list[APIRouter] = []

    for path in sorted(modules_dir.iterdir()):
        if not path.is_dir() or path.name.startswith("_"):
            continue
        if not (path / "routes.py").exists():
            continue

        module = import_module(f"{__name__}.{path.name}.routes")
        router = getattr(module, "router", None)
        if isinstance(router, APIRouter):
            routers.append(router)
            logger.debug("module_loaded", module=path.name)

    return routers
