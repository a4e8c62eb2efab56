"""Lazily-checked property holders for the configuration object.

A ``Property`` stores an optional explicitly-assigned value and an
optional *convention* (the documented default).  Reading a required
property that has neither raises ``MissingPropertyError`` at the point
of the read, so a build fails fast when an author forgot to set it.

Conventions may be plain values or zero-argument callables; callables
are evaluated on every read so that defaults derived from other
settings (for example the sandbox directory under the build directory)
follow later changes to those settings.

Usage
-----
::

    version: Property[str] = Property("version")
    version.set("IU-2022.1.1")
    version.get()           # "IU-2022.1.1"

    flag = Property("instrumentCode", convention=True)
    flag.get()              # True
"""
from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Generic, TypeVar, Union

from ideplugin.errors import MissingPropertyError

T = TypeVar("T")

Convention = Union[T, Callable[[], T], None]


class Property(Generic[T]):
    """A single named configuration value with an optional convention.

    Parameters
    ----------
    name:
        The property name used in error messages.
    convention:
        Default used when no explicit value was assigned.  May be a
        value or a zero-argument callable returning the value.
    """

    def __init__(self, name: str, convention: Convention[T] = None) -> None:
        self._name = name
        self._value: T | None = None
        self._convention = convention

    @property
    def name(self) -> str:
        return self._name

    def set(self, value: T | None) -> None:
        """Assign an explicit value; ``None`` clears the assignment."""
        self._value = value

    def convention(self, value: Convention[T]) -> None:
        """Replace the default used when no explicit value is assigned."""
        self._convention = value

    def _resolve_convention(self) -> T | None:
        if callable(self._convention):
            return self._convention()
        return self._convention

    def or_none(self) -> T | None:
        """Return the explicit value, else the convention, else ``None``."""
        if self._value is not None:
            return self._value
        return self._resolve_convention()

    def get(self) -> T:
        """Return the effective value.

        Raises
        ------
        MissingPropertyError
            If neither an explicit value nor a convention is available.
        """
        value = self.or_none()
        if value is None:
            raise MissingPropertyError(self._name)
        return value

    def get_or_else(self, default: T) -> T:
        value = self.or_none()
        return default if value is None else value

    @property
    def is_present(self) -> bool:
        return self.or_none() is not None

    @property
    def is_explicit(self) -> bool:
        """Return True if a value was assigned rather than defaulted."""
        return self._value is not None

    def __repr__(self) -> str:
        return f"Property(name={self._name!r}, value={self.or_none()!r})"


class ListProperty(Generic[T]):
    """An ordered, appendable list-valued configuration property.

    Reads always return a fresh list so callers cannot mutate the
    backing storage.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._values: list[T] = []

    @property
    def name(self) -> str:
        return self._name

    def add(self, value: T) -> None:
        self._values.append(value)

    def add_all(self, values: Iterable[T]) -> None:
        self._values.extend(values)

    def set(self, values: Iterable[T] | None) -> None:
        """Replace the whole list; ``None`` empties it."""
        self._values = list(values) if values is not None else []

    def get(self) -> list[T]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self):
        return iter(list(self._values))

    def __repr__(self) -> str:
        return f"ListProperty(name={self._name!r}, values={self._values!r})"
