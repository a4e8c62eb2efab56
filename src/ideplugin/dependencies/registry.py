"""Gated registry of plugin dependency descriptors.

Declaring a dependency is cheap and may happen many times while a build
is being configured; resolving the declared dependencies against the
build's dependency graph is expensive and must happen at most once.
``PluginDependencyRegistry`` separates the two with a one-way gate:

* before the gate flips, ``unresolved_view`` reports every registered
  descriptor and ``resolved_snapshot`` reports nothing;
* ``resolved_view(trigger)`` runs ``trigger`` once, flips the gate and
  reports the registered descriptors;
* after the gate flips, ``unresolved_view`` is always empty and both
  resolved reads report the current descriptors, including ones
  registered later.

Example
-------
::

    registry = PluginDependencyRegistry()
    registry.register(BundledPlugin("Groovy"))
    registry.unresolved_view()                  # {BundledPlugin('Groovy')}

    registry.resolved_view(lambda: graph.resolve("idePlugins"))
    registry.unresolved_view()                  # set()
    registry.resolved_view(expensive_trigger)   # trigger is not called

Concurrency
-----------
The gate is a mutex-guarded flag with a condition variable.  Exactly
one caller runs the trigger; concurrent callers wait until it finishes
and then read the resolved view.  If the trigger raises, the gate stays
closed, waiters are released, and the next caller runs the trigger
again.  The lock is not held while the trigger runs, so the trigger may
register further descriptors.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator

from ideplugin.dependencies.descriptors import PluginDescriptor

logger = logging.getLogger(__name__)

ResolutionTrigger = Callable[[], None]


class PluginDependencyRegistry:
    """Insertion-ordered set of plugin descriptors with a resolution gate.

    Parameters
    ----------
    name:
        A human-readable name for this registry (used in log messages).
    """

    def __init__(self, name: str = "pluginDependencies") -> None:
        self._name = name
        self._descriptors: dict[PluginDescriptor, None] = {}
        self._condition = threading.Condition()
        self._resolved = False
        self._resolving_thread: int | None = None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, descriptor: PluginDescriptor) -> None:
        """Add ``descriptor``; registering an equal descriptor again is a no-op."""
        with self._condition:
            if descriptor in self._descriptors:
                return
            self._descriptors[descriptor] = None
        logger.debug("Registered plugin dependency %s in %r", descriptor, self._name)

    def register_all(self, descriptors: Iterable[PluginDescriptor]) -> None:
        """Register each of ``descriptors`` in order."""
        for descriptor in descriptors:
            self.register(descriptor)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def is_resolved(self) -> bool:
        with self._condition:
            return self._resolved

    def unresolved_view(self) -> set[PluginDescriptor]:
        """Return the descriptors still awaiting resolution.

        Empty once the gate has flipped; never changes the gate.
        """
        with self._condition:
            if self._resolved:
                return set()
            return set(self._descriptors)

    def resolved_snapshot(self) -> set[PluginDescriptor]:
        """Return the resolved descriptors without triggering resolution."""
        with self._condition:
            if not self._resolved:
                return set()
            return set(self._descriptors)

    def resolved_view(self, trigger: ResolutionTrigger) -> set[PluginDescriptor]:
        """Return the resolved descriptors, resolving them first if needed.

        Parameters
        ----------
        trigger:
            Performs the real dependency resolution.  Called at most once
            per successful resolution; any exception it raises propagates
            unchanged and leaves the gate closed.

        Returns
        -------
        set[PluginDescriptor]
            A copy of the registered descriptors.
        """
        current = threading.get_ident()
        with self._condition:
            while not self._resolved:
                if self._resolving_thread is None:
                    self._resolving_thread = current
                    break
                if self._resolving_thread == current:
                    # Re-entered from inside the trigger.
                    return set(self._descriptors)
                self._condition.wait()
            else:
                return set(self._descriptors)

        try:
            trigger()
        except BaseException:
            with self._condition:
                self._resolving_thread = None
                self._condition.notify_all()
            logger.debug("Resolution of %r failed; gate left closed", self._name)
            raise

        with self._condition:
            self._resolved = True
            self._resolving_thread = None
            self._condition.notify_all()
            descriptors = set(self._descriptors)
        logger.debug("Plugin dependencies are resolved (%d in %r)", len(descriptors), self._name)
        return descriptors

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __contains__(self, descriptor: object) -> bool:
        with self._condition:
            return descriptor in self._descriptors

    def __len__(self) -> int:
        with self._condition:
            return len(self._descriptors)

    def __iter__(self) -> Iterator[PluginDescriptor]:
        """Iterate over a snapshot of the descriptors in registration order."""
        with self._condition:
            return iter(list(self._descriptors))

    def __repr__(self) -> str:
        return (
            f"PluginDependencyRegistry(name={self._name!r}, "
            f"resolved={self.is_resolved}, "
            f"descriptors={[str(d) for d in self]})"
        )
