"""
Extension Dependency Ordering.

This module orders discovered extensions so that dependencies load first.

Key features:
- Dependency edges from package.json (runtime, peer and dev dependencies)
- Depth-first topological sort with post-order emission
- Cycle tolerance: a back-edge is skipped, never raised
- Local project always loads last
"""

from collections.abc import Callable, Iterable
from enum import Enum
from pathlib import Path

from microgravity.extension.manifest import read_package_dependencies
from microgravity.extension.scanner import DiscoveredExtension


class VisitState(Enum):
    """Visit state of a node during the sort."""

    UNVISITED = "unvisited"
    VISITING = "visiting"
    VISITED = "visited"


class DependencyGraph:
    """
    Dependency relation among discovered extensions.

    Only names that resolve to a discovered, non-local extension become
    edges. Anything else in package.json is an ordinary package.
    """

    def __init__(
        self,
        extensions: Iterable[DiscoveredExtension],
        dependencies: dict[str, list[str]],
    ):
        """
        Initialize DependencyGraph.

        Args:
            extensions: Extensions in discovery order
            dependencies: Extension name -> declared dependency names
        """
        self.extensions = list(extensions)
        self._by_name = {ext.name: ext for ext in self.extensions}
        # The local extension is never a dependency target: it always loads last
        self._dependencies = {
            name: [
                dep
                for dep in deps
                if dep in self._by_name and not self._by_name[dep].is_local
            ]
            for name, deps in dependencies.items()
        }

    @classmethod
    def from_extensions(
        cls,
        extensions: Iterable[DiscoveredExtension],
        read_dependencies: Callable[[Path], list[str]] = read_package_dependencies,
    ) -> "DependencyGraph":
        """Build the graph by reading each extension's package.json."""
        extensions = list(extensions)
        dependencies = {ext.name: read_dependencies(ext.path) for ext in extensions}
        return cls(extensions, dependencies)

    def dependencies_of(self, name: str) -> list[str]:
        return list(self._dependencies.get(name, []))

    def order(
        self, on_cycle: Callable[[list[str]], None] | None = None
    ) -> list[DiscoveredExtension]:
        """
        Compute the load order.

        Args:
            on_cycle: Called with the cycle path (e.g. ["a", "b", "a"]) each
                time a back-edge is skipped. Does not affect the order.

        Returns:
            Extensions, dependencies before dependents, local last
        """
        state = {name: VisitState.UNVISITED for name in self._by_name}
        stack: list[str] = []
        sorted_exts: list[DiscoveredExtension] = []

        def visit(name: str) -> None:
            if state[name] is VisitState.VISITED:
                return
            if state[name] is VisitState.VISITING:
                if on_cycle is not None:
                    on_cycle(stack[stack.index(name):] + [name])
                return

            state[name] = VisitState.VISITING
            stack.append(name)

            for dep_name in self._dependencies.get(name, []):
                visit(dep_name)

            stack.pop()
            state[name] = VisitState.VISITED
            sorted_exts.append(self._by_name[name])

        for ext in self.extensions:
            if not ext.is_local:
                visit(ext.name)

        for ext in self.extensions:
            if ext.is_local:
                visit(ext.name)

        return sorted_exts


def sort_by_dependencies(
    extensions: Iterable[DiscoveredExtension],
    on_cycle: Callable[[list[str]], None] | None = None,
) -> list[DiscoveredExtension]:
    """
    Sort extensions by their package.json dependencies.

    Args:
        extensions: Discovered extensions
        on_cycle: Optional cycle observer, see DependencyGraph.order

    Returns:
        Load order
    """
    return DependencyGraph.from_extensions(extensions).order(on_cycle)
