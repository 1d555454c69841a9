"""Blueprint registration helpers."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import Iterable, Iterator

from flask import Blueprint, Flask

PLUGIN_PACKAGE = "plugins"


def discover_plugins(package: str = PLUGIN_PACKAGE) -> Iterator[str]:
    """Yield import paths for all plugin packages."""

    package_path = Path(__file__).resolve().parent.parent / package
    if not package_path.exists():
        return
    for module_info in pkgutil.iter_modules([str(package_path)]):
        if module_info.ispkg:
            yield f"{package}.{module_info.name}"


def _iter_blueprints(package: str = PLUGIN_PACKAGE) -> Iterable[Blueprint]:
    blueprints: list[Blueprint] = []
    for dotted in discover_plugins(package):
        module = importlib.import_module(f"{dotted}.api")
        module_blueprints = getattr(module, "blueprints", None)
        if module_blueprints:
            blueprints.extend(module_blueprints)
            continue
        blueprint = getattr(module, "bp", None)
        if blueprint is not None:
            blueprints.append(blueprint)
    return blueprints


def register_plugin_blueprints(app: Flask) -> None:
    for bp in _iter_blueprints():
        app.register_blueprint(bp)


__all__ = ["PLUGIN_PACKAGE", "discover_plugins", "register_plugin_blueprints"]
