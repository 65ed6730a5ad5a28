"""
Tests for the installer registry — registration and dependency ordering.
"""

import itertools

import pytest

from devsetup.core.errors import (
    CycleError,
    DependencyError,
    DuplicateNameError,
    UnknownDependencyError,
)
from devsetup.core.installers.registry import InstallerRegistry
from tests.fakes import FakeInstaller


def _names(installers) -> list[str]:
    return [i.name for i in installers]


def _registry(*specs: tuple[str, list[str]]) -> InstallerRegistry:
    registry = InstallerRegistry()
    for name, deps in specs:
        registry.register(FakeInstaller(name, deps=deps))
    return registry


# ── Registration ────────────────────────────────────────────────────


class TestRegistration:
    def test_register_and_get(self, registry):
        inst = FakeInstaller("A")
        registry.register(inst)
        assert registry.get("A") is inst
        assert "A" in registry
        assert len(registry) == 1

    def test_get_missing(self, registry):
        assert registry.get("nope") is None
        assert "nope" not in registry

    def test_registration_order_kept(self):
        registry = _registry(("B", []), ("A", []), ("C", []))
        assert registry.names() == ["B", "A", "C"]
        assert _names(registry.installers()) == ["B", "A", "C"]

    def test_duplicate_name_rejected(self, registry):
        registry.register(FakeInstaller("A"))
        with pytest.raises(DuplicateNameError) as exc:
            registry.register(FakeInstaller("A"))
        assert exc.value.name == "A"
        assert len(registry) == 1


# ── Ordering ────────────────────────────────────────────────────────


class TestResolveOrder:
    def test_empty(self, registry):
        assert registry.resolve_order() == []

    def test_independent_keep_registration_order(self):
        registry = _registry(("C", []), ("A", []), ("B", []))
        assert _names(registry.resolve_order()) == ["C", "A", "B"]

    def test_dependency_before_dependent(self):
        registry = _registry(("B", ["A"]), ("A", []))
        assert _names(registry.resolve_order()) == ["A", "B"]

    def test_tie_break_after_shared_dependency(self):
        # B, A, C registered; B and C depend on A.
        registry = _registry(("B", ["A"]), ("A", []), ("C", ["A"]))
        assert _names(registry.resolve_order()) == ["A", "B", "C"]

    def test_earliest_registered_ready_goes_first(self):
        # D becomes ready only after A; X is ready immediately but
        # registered after D, so once A is placed D wins.
        registry = _registry(("D", ["A"]), ("A", []), ("X", []))
        assert _names(registry.resolve_order()) == ["A", "D", "X"]

    def test_chain(self):
        registry = _registry(("C", ["B"]), ("B", ["A"]), ("A", []))
        assert _names(registry.resolve_order()) == ["A", "B", "C"]

    def test_builtin_like_graph(self):
        registry = _registry(
            ("APT Update & Upgrade", []),
            ("Rust", ["APT Update & Upgrade"]),
            ("Alacritty", ["Rust", "APT Update & Upgrade"]),
        )
        assert _names(registry.resolve_order()) == [
            "APT Update & Upgrade",
            "Rust",
            "Alacritty",
        ]

    def test_duplicate_dependency_entries_tolerated(self):
        registry = _registry(("B", ["A", "A"]), ("A", []))
        assert _names(registry.resolve_order()) == ["A", "B"]

    def test_every_installer_after_its_dependencies(self):
        specs = [
            ("E", ["B", "D"]),
            ("A", []),
            ("D", ["C"]),
            ("B", ["A"]),
            ("C", ["A"]),
            ("F", []),
        ]
        for perm in itertools.permutations(specs):
            registry = _registry(*perm)
            order = _names(registry.resolve_order())
            assert sorted(order) == sorted(n for n, _ in specs)
            for name, deps in specs:
                for dep in deps:
                    assert order.index(dep) < order.index(name)

    def test_resolution_is_deterministic(self):
        registry = _registry(("B", ["A"]), ("A", []), ("C", ["A"]), ("D", []))
        first = _names(registry.resolve_order())
        assert all(_names(registry.resolve_order()) == first for _ in range(5))


# ── Broken graphs ───────────────────────────────────────────────────


class TestResolveErrors:
    def test_unknown_dependency(self):
        registry = _registry(("X", ["Y"]))
        with pytest.raises(UnknownDependencyError) as exc:
            registry.resolve_order()
        assert exc.value.dependency == "Y"
        assert exc.value.installer == "X"
        assert isinstance(exc.value, DependencyError)

    def test_two_node_cycle(self):
        registry = _registry(("A", ["B"]), ("B", ["A"]))
        with pytest.raises(CycleError) as exc:
            registry.resolve_order()
        assert exc.value.participants == ["A", "B"]

    def test_self_cycle(self):
        registry = _registry(("A", ["A"]), ("B", []))
        with pytest.raises(CycleError) as exc:
            registry.resolve_order()
        assert exc.value.participants == ["A"]

    def test_cycle_excludes_downstream_and_unrelated(self):
        registry = _registry(
            ("Free", []),
            ("A", ["C"]),
            ("B", ["A"]),
            ("C", ["B"]),
            ("Downstream", ["C"]),
        )
        with pytest.raises(CycleError) as exc:
            registry.resolve_order()
        assert exc.value.participants == ["A", "B", "C"]
        assert "Downstream" not in str(exc.value)
