"""
Per-class cache of the fields that hold bindable widgets.

Each form class is described once, on its first binding pass, by an ordered tuple of
`FieldRef`. The description comes from a declaration made with `bindable_fields()` /
`register_fields()` when one exists for the class or any of its bases, and otherwise from
every instance attribute of the first instance. Whether a field holds a QWidget or QAction
is decided when it is read, since a field may still be None on the first pass.

The cache is a module-level dict owned by the UI thread and mutated without a lock.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

logger = logging.getLogger("FormBind.FieldCache")

_declared_fields: Dict[type, Tuple[str, ...]] = {}
_cache: Dict[type, Tuple["FieldRef", ...]] = {}

T = TypeVar("T", bound=type)


class FieldRef:
    """Names one field of a form; `read()` returns the widget it currently holds, or None."""
    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"FieldRef({self.name!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, FieldRef) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def read(self, form: Any) -> Any:
        return getattr(form, self.name, None)


def register_fields(form_type: type, names: Iterable[str]) -> None:
    """Declares the bindable fields introduced by `form_type` itself."""
    names = tuple(names)
    if not all(isinstance(name, str) and name for name in names):
        raise ValueError(f"Field names for {form_type.__name__} must be non-empty strings: {names!r}")
    _declared_fields[form_type] = names
    stale = [cached for cached in _cache if issubclass(cached, form_type)]
    for cached in stale:
        del _cache[cached]


def bindable_fields(*names: str) -> Callable[[T], T]:
    """Class decorator form of `register_fields()`."""
    def decorate(form_type: T) -> T:
        register_fields(form_type, names)
        return form_type
    return decorate


def _declared_for(form_type: type) -> Optional[List[str]]:
    """Collects declarations along the MRO, base classes first, without duplicates."""
    declared: List[str] = []
    found = False
    for klass in reversed(form_type.__mro__):
        names = _declared_fields.get(klass)
        if names is None:
            continue
        found = True
        declared.extend(name for name in names if name not in declared)
    return declared if found else None


def _discover(instance: Any) -> List[str]:
    try:
        return list(vars(instance))
    except TypeError:
        return []


def fields(form_type: Type[Any], instance: Any = None) -> Tuple[FieldRef, ...]:
    """
    Returns the ordered field descriptors of `form_type`, building them on first use.

    `instance` is only consulted when the class has no declaration and is not cached yet.
    """
    cached = _cache.get(form_type)
    if cached is not None:
        return cached

    names = _declared_for(form_type)
    if names is None:
        if instance is None:
            logger.debug("No declaration and no instance for %s; nothing to cache yet.", form_type.__name__)
            return ()
        if type(instance) is not form_type:
            raise TypeError(f"Instance of {type(instance).__name__} cannot describe {form_type.__name__}")
        names = _discover(instance)
        logger.debug("Discovered %d fields on %s", len(names), form_type.__name__)
    else:
        logger.debug("Using %d declared fields for %s", len(names), form_type.__name__)

    descriptor = tuple(FieldRef(name) for name in names)
    _cache[form_type] = descriptor
    return descriptor


def is_cached(form_type: type) -> bool:
    return form_type in _cache


def clear() -> None:
    """Drops every cached descriptor. Declarations are kept."""
    _cache.clear()
