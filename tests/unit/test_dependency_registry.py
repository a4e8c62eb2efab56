"""Unit tests for ideplugin.dependencies.registry — the gated
PluginDependencyRegistry, including failure and concurrency behaviour.
"""
from __future__ import annotations

import logging
import threading
import time

import pytest

from ideplugin.dependencies import (
    BundledPlugin,
    MarketplacePlugin,
    PluginDependencyRegistry,
    ProjectPlugin,
)

GROOVY = BundledPlugin("Groovy")
MARKDOWN = MarketplacePlugin("org.intellij.plugins.markdown", "8.5.0")
SHARED = ProjectPlugin(":shared")


class CountingTrigger:
    """Thread-safe call-counting resolution stub."""

    def __init__(self, fail_times: int = 0, delay: float = 0.0) -> None:
        self.calls = 0
        self._fail_times = fail_times
        self._delay = delay
        self._lock = threading.Lock()

    def __call__(self) -> None:
        with self._lock:
            self.calls += 1
            call = self.calls
        if self._delay:
            time.sleep(self._delay)
        if call <= self._fail_times:
            raise RuntimeError(f"resolution failed (call {call})")


def _registry_with_three() -> PluginDependencyRegistry:
    registry = PluginDependencyRegistry()
    registry.register(GROOVY)
    registry.register(MARKDOWN)
    registry.register(GROOVY)
    registry.register(SHARED)
    return registry


# ===========================================================================
# Registration and unresolved view
# ===========================================================================


class TestRegistration:
    def test_empty_registry(self) -> None:
        registry = PluginDependencyRegistry()
        assert len(registry) == 0
        assert registry.unresolved_view() == set()
        assert not registry.is_resolved

    def test_duplicates_collapse(self) -> None:
        registry = _registry_with_three()
        assert len(registry) == 3
        assert registry.unresolved_view() == {GROOVY, MARKDOWN, SHARED}

    def test_iteration_keeps_registration_order(self) -> None:
        registry = _registry_with_three()
        assert list(registry) == [GROOVY, MARKDOWN, SHARED]

    def test_register_all(self) -> None:
        registry = PluginDependencyRegistry()
        registry.register_all([GROOVY, MARKDOWN, GROOVY])
        assert list(registry) == [GROOVY, MARKDOWN]

    def test_contains(self) -> None:
        registry = _registry_with_three()
        assert GROOVY in registry
        assert BundledPlugin("android") not in registry

    def test_unresolved_view_is_a_copy(self) -> None:
        registry = _registry_with_three()
        registry.unresolved_view().clear()
        assert len(registry.unresolved_view()) == 3

    def test_unresolved_view_does_not_flip_gate(self) -> None:
        registry = _registry_with_three()
        registry.unresolved_view()
        assert not registry.is_resolved

    def test_resolved_snapshot_is_empty_before_resolution(self) -> None:
        assert _registry_with_three().resolved_snapshot() == set()

    def test_repr(self) -> None:
        text = repr(_registry_with_three())
        assert "Groovy" in text
        assert "resolved=False" in text


# ===========================================================================
# Resolution gate
# ===========================================================================


class TestResolution:
    def test_resolved_view_runs_trigger_once(self) -> None:
        registry = _registry_with_three()
        trigger = CountingTrigger()
        assert registry.resolved_view(trigger) == {GROOVY, MARKDOWN, SHARED}
        assert registry.resolved_view(trigger) == {GROOVY, MARKDOWN, SHARED}
        assert trigger.calls == 1

    def test_unresolved_view_empty_after_resolution(self) -> None:
        registry = _registry_with_three()
        registry.resolved_view(CountingTrigger())
        assert registry.is_resolved
        assert registry.unresolved_view() == set()

    def test_resolved_snapshot_after_resolution(self) -> None:
        registry = _registry_with_three()
        registry.resolved_view(CountingTrigger())
        assert registry.resolved_snapshot() == {GROOVY, MARKDOWN, SHARED}

    def test_registration_after_resolution_is_visible(self) -> None:
        registry = _registry_with_three()
        trigger = CountingTrigger()
        registry.resolved_view(trigger)
        extra = BundledPlugin("android")
        registry.register(extra)
        assert extra in registry.resolved_view(trigger)
        assert registry.unresolved_view() == set()
        assert trigger.calls == 1

    def test_trigger_may_register_descriptors(self) -> None:
        registry = PluginDependencyRegistry()

        def trigger() -> None:
            registry.register(GROOVY)

        assert registry.resolved_view(trigger) == {GROOVY}

    def test_reentrant_call_from_trigger_does_not_deadlock(self) -> None:
        registry = _registry_with_three()
        inner: list[set] = []

        def trigger() -> None:
            inner.append(registry.resolved_view(trigger))

        registry.resolved_view(trigger)
        assert inner == [{GROOVY, MARKDOWN, SHARED}]

    def test_resolution_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = _registry_with_three()
        with caplog.at_level(logging.DEBUG, logger="ideplugin.dependencies.registry"):
            registry.resolved_view(CountingTrigger())
        assert "Plugin dependencies are resolved" in caplog.text


# ===========================================================================
# Resolution failures
# ===========================================================================


class TestResolutionFailure:
    def test_failure_propagates_unchanged(self) -> None:
        registry = _registry_with_three()
        with pytest.raises(RuntimeError, match="resolution failed"):
            registry.resolved_view(CountingTrigger(fail_times=1))

    def test_failure_leaves_gate_closed(self) -> None:
        registry = _registry_with_three()
        with pytest.raises(RuntimeError):
            registry.resolved_view(CountingTrigger(fail_times=1))
        assert not registry.is_resolved
        assert registry.unresolved_view() == {GROOVY, MARKDOWN, SHARED}

    def test_retry_invokes_trigger_again(self) -> None:
        registry = _registry_with_three()
        trigger = CountingTrigger(fail_times=1)
        with pytest.raises(RuntimeError):
            registry.resolved_view(trigger)
        assert registry.resolved_view(trigger) == {GROOVY, MARKDOWN, SHARED}
        assert trigger.calls == 2
        assert registry.is_resolved


# ===========================================================================
# Concurrency
# ===========================================================================


def _run_concurrently(registry: PluginDependencyRegistry, trigger: CountingTrigger, workers: int):
    barrier = threading.Barrier(workers)
    results: list[set] = []
    errors: list[BaseException] = []
    lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        try:
            view = registry.resolved_view(trigger)
        except RuntimeError as exc:
            with lock:
                errors.append(exc)
        else:
            with lock:
                results.append(view)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)
    return results, errors


class TestConcurrency:
    def test_trigger_runs_exactly_once(self) -> None:
        registry = _registry_with_three()
        trigger = CountingTrigger(delay=0.05)
        results, errors = _run_concurrently(registry, trigger, workers=16)
        assert trigger.calls == 1
        assert errors == []
        assert len(results) == 16
        assert all(view == {GROOVY, MARKDOWN, SHARED} for view in results)

    def test_waiters_retry_after_failed_trigger(self) -> None:
        registry = _registry_with_three()
        trigger = CountingTrigger(fail_times=1, delay=0.05)
        results, errors = _run_concurrently(registry, trigger, workers=8)
        assert len(errors) == 1
        assert len(results) == 7
        assert trigger.calls == 2
        assert registry.is_resolved
