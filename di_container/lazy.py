"""Forwarding handles for services that are still under construction.

When ``A`` depends on ``B`` and ``B`` depends back on ``A``, one of them has
to be constructed first. The container hands the first-built service a
``LazyReference`` standing in for the other one. The reference wraps a
single-assignment cell that the container fills as soon as the constructor
it stands in for returns; from then on every attribute access, call and
comparison is forwarded to the real instance.

Using the reference before it is filled (for example inside the
constructor that received it) raises ``LazyReferenceError``.
"""

from typing import Any, Iterator

from .errors import LazyReferenceError

_EMPTY = object()


def _target_of(reference: "LazyReference") -> Any:
    target = object.__getattribute__(reference, "_lazy_target")
    if target is _EMPTY:
        identifier = object.__getattribute__(reference, "_lazy_identifier")
        raise LazyReferenceError.premature_dereference(identifier)
    return target


class LazyReference:
    """Stand-in for the instance of ``identifier`` until it exists."""

    __slots__ = ("_lazy_identifier", "_lazy_target")

    def __init__(self, identifier: str):
        object.__setattr__(self, "_lazy_identifier", identifier)
        object.__setattr__(self, "_lazy_target", _EMPTY)

    @property
    def __class__(self):
        return type(_target_of(self))

    def __getattr__(self, name: str) -> Any:
        return getattr(_target_of(self), name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(_target_of(self), name, value)

    def __delattr__(self, name: str) -> None:
        delattr(_target_of(self), name)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return _target_of(self)(*args, **kwargs)

    def __eq__(self, other: Any) -> bool:
        return _target_of(self) == unwrap(other)

    def __ne__(self, other: Any) -> bool:
        return _target_of(self) != unwrap(other)

    def __hash__(self) -> int:
        return hash(_target_of(self))

    def __bool__(self) -> bool:
        return bool(_target_of(self))

    def __str__(self) -> str:
        return str(_target_of(self))

    def __len__(self) -> int:
        return len(_target_of(self))

    def __iter__(self) -> Iterator[Any]:
        return iter(_target_of(self))

    def __contains__(self, item: Any) -> bool:
        return item in _target_of(self)

    def __getitem__(self, key: Any) -> Any:
        return _target_of(self)[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        _target_of(self)[key] = value

    def __repr__(self) -> str:
        identifier = object.__getattribute__(self, "_lazy_identifier")
        target = object.__getattribute__(self, "_lazy_target")
        if target is _EMPTY:
            return f"<LazyReference '{identifier}' (unfilled)>"
        return f"<LazyReference '{identifier}' -> {target!r}>"


def fill(reference: LazyReference, instance: Any) -> None:
    """Point ``reference`` at ``instance``. A reference can be filled once."""
    if object.__getattribute__(reference, "_lazy_target") is not _EMPTY:
        raise LazyReferenceError.already_filled(
            object.__getattribute__(reference, "_lazy_identifier")
        )
    object.__setattr__(reference, "_lazy_target", instance)


def is_lazy_reference(value: Any) -> bool:
    # type() rather than isinstance(), __class__ is forwarded
    return type(value) is LazyReference


def is_filled(reference: LazyReference) -> bool:
    return object.__getattribute__(reference, "_lazy_target") is not _EMPTY


def unwrap(value: Any) -> Any:
    """Return the instance behind a filled reference, or ``value`` itself."""
    if is_lazy_reference(value):
        return _target_of(value)
    return value
