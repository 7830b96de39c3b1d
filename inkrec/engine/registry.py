"""Segmenter registry: every segmenter class registers itself via decorator.

Usage:
    @segmenter(name="ShortStraw", tags={"polyline"}, description="Straw-length corners")
    class ShortStrawSegmenter(Segmenter):
        ...

Adding a new segmenter = creating one module in ``inkrec.engine.segmenters``
with the decorator. Nothing else changes.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from inkrec.engine.segmenters.base import Segmenter

logger = logging.getLogger(__name__)


@dataclass
class SegmenterSpec:
    name: str
    cls: type["Segmenter"]
    tags: set[str] = field(default_factory=set)
    description: str = ""


class SegmenterRegistry:
    """Singleton registry of all segmenters."""

    def __init__(self) -> None:
        self._segmenters: dict[str, SegmenterSpec] = {}

    def register(self, spec: SegmenterSpec) -> None:
        if spec.name in self._segmenters:
            raise ValueError(f"Duplicate segmenter name: {spec.name}")
        self._segmenters[spec.name] = spec
        logger.debug("Registered segmenter %s (%s)", spec.name, spec.cls.__name__)

    def get(self, name: str) -> SegmenterSpec:
        return self._segmenters[name]

    def with_tag(self, tag: str) -> list[SegmenterSpec]:
        specs = [s for s in self._segmenters.values() if tag in s.tags]
        return sorted(specs, key=lambda s: s.name)

    def all(self) -> list[SegmenterSpec]:
        return sorted(self._segmenters.values(), key=lambda s: s.name)

    def create(self, name: str, **kwargs: Any) -> "Segmenter":
        return self.get(name).cls(**kwargs)

    @property
    def count(self) -> int:
        return len(self._segmenters)

    def __contains__(self, name: object) -> bool:
        return name in self._segmenters


# Module-level singleton
_registry = SegmenterRegistry()


def get_registry() -> SegmenterRegistry:
    return _registry


def segmenter(
    *,
    name: str,
    tags: set[str] | None = None,
    description: str = "",
):
    """Class decorator to register a segmenter under ``name``."""

    def decorator(cls):
        cls.name = name
        _registry.register(
            SegmenterSpec(name=name, cls=cls, tags=tags or set(), description=description)
        )
        return cls

    return decorator


def discover_segmenters(package_name: str = "inkrec.engine.segmenters") -> SegmenterRegistry:
    """Import every module of the segmenters package so @segmenter decorators fire."""
    package = importlib.import_module(package_name)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{package_name}.{module_name}")
    return _registry


def create_segmenter(name: str, **kwargs: Any) -> "Segmenter":
    discover_segmenters()
    return _registry.create(name, **kwargs)
