"""
Argot utilities (internal helpers, carefully exposed)

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with
    None or the empty string (an empty default text is a legitimate setting).
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr),
    handing out copies of containers so parsed state cannot be mutated from outside.

Stability and contract
- Names not in __all__ are internal and may change without notice.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce("", "fallback")
    ''
"""
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and "".
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        # Pickle back to the singleton.
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    This returns the given object unless it is the Unset sentinel, in which case
    the provided default is returned. Falsey values like None, 0, "" or [] are
    preserved as-is; they are not treated as “unset”.

    Examples
    - coalesce("4", "")        -> "4"
    - coalesce(Unset, "")      -> ""
    - coalesce(None, "x")      -> None
    """
    return object if object is not Unset else default


def _immortalize(object):
    """
    Recursively copy container values, processing nested items.

    Behavior
    - Sequence (non-string, non-bytes): returns a new list with each element processed.
    - Mapping: returns a new dict with the same keys and processed values.
    - Set: returns a new set with each element processed.
    - Anything else: returned as-is.
    """
    if isinstance(object, Sequence) and not isinstance(object, str | bytes | bytearray):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns a copy
    for container types, so callers never alias the internal storage.

    Example
    - Given self._value, declare value = mirror("value") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    getter.__qualname__ = getter.__name__ = name
    return property(getter)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Falsey: bool(Unset) is False, but it is not equivalent to None or "".
"""


__all__ = (
    # Functions
    "coalesce",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
