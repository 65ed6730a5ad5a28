"""
Installer registry — registration and dependency-ordered lookup.

The registry owns the installers in registration order. Execution order
is never stored: ``resolve_order()`` derives it with Kahn's algorithm,
breaking ties by registration order so the same registrations always
produce the same sequence.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from devsetup.core.errors import CycleError, DuplicateNameError, UnknownDependencyError
from devsetup.core.installers.base import Installer

logger = logging.getLogger(__name__)


class InstallerRegistry:
    """Holds registered installers and resolves their execution order."""

    def __init__(self):
        self._installers: list[Installer] = []
        self._by_name: dict[str, Installer] = {}

    def register(self, installer: Installer) -> None:
        """Append an installer.

        Raises:
            DuplicateNameError: An installer with the same name exists.
        """
        name = installer.name
        if name in self._by_name:
            raise DuplicateNameError(name)
        self._installers.append(installer)
        self._by_name[name] = installer
        logger.debug("Registered installer: %s", name)

    def get(self, name: str) -> Installer | None:
        return self._by_name.get(name)

    def names(self) -> list[str]:
        """Installer names in registration order."""
        return [i.name for i in self._installers]

    def installers(self) -> list[Installer]:
        """Installers in registration order (not execution order)."""
        return list(self._installers)

    def __len__(self) -> int:
        return len(self._installers)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Installer]:
        return iter(list(self._installers))

    def resolve_order(self) -> list[Installer]:
        """Topologically sort installers by their declared dependencies.

        Every installer appears strictly after all installers it depends
        on. Among installers that are ready at the same time, the one
        registered first goes first.

        Raises:
            UnknownDependencyError: A dependency names no registered installer.
            CycleError: The dependency relation is cyclic.
        """
        position = {inst.name: i for i, inst in enumerate(self._installers)}

        # Missing refs
        deps: dict[str, list[str]] = {}
        for inst in self._installers:
            declared = list(dict.fromkeys(inst.dependencies()))
            for dep in declared:
                if dep not in position:
                    raise UnknownDependencyError(inst.name, dep)
            deps[inst.name] = declared

        # Kahn's algorithm, ready set kept sorted by registration position
        in_degree = {name: len(d) for name, d in deps.items()}
        dependents: dict[str, list[str]] = {name: [] for name in deps}
        for name, declared in deps.items():
            for dep in declared:
                dependents[dep].append(name)

        ready = sorted(
            (name for name, degree in in_degree.items() if degree == 0),
            key=position.__getitem__,
        )
        order: list[Installer] = []
        while ready:
            name = ready.pop(0)
            order.append(self._by_name[name])
            for successor in dependents[name]:
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    ready.append(successor)
            ready.sort(key=position.__getitem__)

        if len(order) < len(self._installers):
            raise CycleError(self._cycle_participants(deps, in_degree))

        logger.debug("Resolved order: %s", " → ".join(i.name for i in order))
        return order

    def _cycle_participants(
        self,
        deps: dict[str, list[str]],
        in_degree: dict[str, int],
    ) -> list[str]:
        """Narrow the unresolved installers down to those on a cycle.

        Installers left over by Kahn's algorithm are either on a cycle or
        merely downstream of one. Repeatedly dropping leftovers that no
        other leftover depends on strips the downstream ones.
        """
        stuck = {name for name, degree in in_degree.items() if degree > 0}
        changed = True
        while changed:
            changed = False
            needed = {dep for name in stuck for dep in deps[name] if dep in stuck}
            for name in stuck - needed:
                stuck.discard(name)
                changed = True
        return [i.name for i in self._installers if i.name in stuck]
