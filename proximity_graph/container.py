"""Wiring of the graph, the map renderer and the visualizer.

Bindings are explicit: each port type maps to a provider callable. A
shared binding builds its instance once and reuses it until the binding
is replaced or the cache is dropped. Tests bind fakes the same way.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config

Provider = Callable[[], Any]


@dataclass
class _Binding:
    provider: Provider
    shared: bool
    instance: Any = None
    built: bool = False


@dataclass
class Container:
    """Maps port types to providers.

    Usage:
        container = Container.create_default()
        graph = container.resolve(GraphQueryPort)
        graph.insert_location(...)
        container.resolve(GraphVisualizer).statistics()

        # Swapping the renderer in a test
        container.register(MapRendererPort, lambda: FakeRenderer())

    Attributes:
        config: Configuration handed to the default bindings
    """

    config: AppConfig = field(default_factory=get_config)

    _bindings: Dict[type[Any], _Binding] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        key: type[Any],
        provider: Provider,
        singleton: bool = True,
    ) -> None:
        """Bind ``key`` to ``provider``, dropping any instance built before.

        Args:
            key: Port type (usually a Protocol) or concrete class.
            provider: Zero-argument callable building the instance.
            singleton: Share one instance across ``resolve`` calls.
        """
        with self._lock:
            self._bindings[key] = _Binding(provider=provider, shared=singleton)

    def resolve(self, key: type[Any]) -> Any:
        """Instance bound to ``key``.

        Raises:
            KeyError: If nothing is bound to ``key``.
        """
        with self._lock:
            binding = self._bindings.get(key)
            if binding is None:
                raise KeyError(f"Type not registered: {key}")
            if not binding.shared:
                return binding.provider()
            if not binding.built:
                binding.instance = binding.provider()
                binding.built = True
            return binding.instance

    def is_registered(self, key: type[Any]) -> bool:
        return key in self._bindings

    def clear_singletons(self) -> None:
        """Forget built instances; bindings stay."""
        with self._lock:
            for binding in self._bindings.values():
                binding.instance = None
                binding.built = False

    def clear_all(self) -> None:
        with self._lock:
            self._bindings.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Container with one shared, empty ProximityGraph.

        The visualizer reads that graph and renders through folium.
        """
        from .adapters.rendering import FoliumMapRenderer
        from .graph import ProximityGraph
        from .ports.graph import GraphQueryPort
        from .ports.rendering import MapRendererPort
        from .services import GraphVisualizer

        config = config or get_config()
        container = cls(config=config)

        container.register(GraphQueryPort, ProximityGraph)
        container.register(
            MapRendererPort, lambda: FoliumMapRenderer(config.rendering)
        )
        container.register(
            GraphVisualizer,
            lambda: GraphVisualizer(
                graph=container.resolve(GraphQueryPort),
                map_renderer=container.resolve(MapRendererPort),
                config=config.report,
            ),
        )
        return container


_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Process-wide container, built with default bindings on first use."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Drop the process-wide container (tests)."""
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
