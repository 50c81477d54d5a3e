"""
Argot kinds: the closed set of target types a payload can be converted into.

Kinds
- Integral(width, signed=True): fixed-width integers (see argot.integers).
  Ready-made: int8, int16, int32, int64, uint8, uint16, uint32, uint64.
- Boolean(): "t"/"true"/"1" and "f"/"false"/"0" (singleton: `boolean`).
- Character(): exactly one character (singleton: `character`).
- Scalar(factory): any other type, built by calling factory(text).
- Sequence(element, delimiter=","): delimiter-separated list of `element`.
- Optional(element): a present `element`; absence is the token's business.

Kinds are immutable, hashable and compare by value.

Conversion
- convert(text, kind) dispatches on the kind and recurses for Sequence and
  Optional elements. Every conversion failure is an ArgBadTypeException.
- resolve(annotation) maps plain Python annotations to kinds
  (bool, int, list[T], T | None, other callables).

Configuration
- DEFAULT_DELIMITER is used by Sequence kinds built without a delimiter. The
  host application can override it by defining __delimiter__ in __main__.
"""
import functools
import re
import types
import typing

from .faults import ArgBadTypeException
from .integers import parse_integral, parse_boolean, parse_character
from .utils import Unset, coalesce

DEFAULT_DELIMITER = ","


def default_delimiter():
    """
    return the host-configured delimiter (__main__.__delimiter__) or ",".
    """
    return getattr(__import__("__main__"), "__delimiter__", DEFAULT_DELIMITER)


class Kind:
    """
    Base of every target-type tag.

    Subclasses list their fields in __fields__; the fields are written once
    in __new__ (via object.__setattr__) and are read-only afterwards.
    """
    __slots__ = ()
    __fields__ = ()

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        cls.__typename__ = re.sub(r"(?<!^)(?=[A-Z])", r"-", cls.__name__).lower()

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} kind is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} kind is read-only")

    def __eq__(self, other, /):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__fields__)

    def __hash__(self):
        return hash((type(self), *(getattr(self, name) for name in self.__fields__)))

    def __rich_repr__(self):
        for name in self.__fields__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"{type(self).__typename__}({', '.join('%s=%r' % field for field in self.__rich_repr__())})"

    def __reduce__(self):
        return type(self), tuple(getattr(self, name) for name in self.__fields__)


class Integral(Kind):
    __slots__ = ("width", "signed")
    __fields__ = ("width", "signed")

    def __new__(cls, width, signed=True):
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("integral 'width' must be an integer")
        elif width < 1:
            raise ValueError("integral 'width' must be a positive integer")
        if not isinstance(signed, bool):
            raise TypeError("integral 'signed' must be a boolean")

        self = super().__new__(cls)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "signed", signed)
        return self

    @property
    def minimum(self):
        return -(1 << (self.width - 1)) if self.signed else 0

    @property
    def maximum(self):
        return (1 << (self.width - 1)) - 1 if self.signed else (1 << self.width) - 1


class Boolean(Kind):
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)


class Character(Kind):
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)


class Scalar(Kind):
    __slots__ = ("factory",)
    __fields__ = ("factory",)

    def __new__(cls, factory):
        if not callable(factory):
            raise TypeError("scalar 'factory' must be callable")
        elif factory is bool:
            # bool("false") is True; booleans have their own grammar.
            raise ValueError("scalar 'factory' cannot be bool, use the boolean kind")

        self = super().__new__(cls)
        object.__setattr__(self, "factory", factory)
        return self


class Sequence(Kind):
    __slots__ = ("element", "delimiter")
    __fields__ = ("element", "delimiter")

    def __new__(cls, element, delimiter=Unset):
        element = resolve(element)
        if not isinstance(delimiter := coalesce(delimiter, default_delimiter()), str):
            raise TypeError("sequence 'delimiter' must be a string")
        elif len(delimiter) != 1:
            raise ValueError("sequence 'delimiter' must be a single character")

        self = super().__new__(cls)
        object.__setattr__(self, "element", element)
        object.__setattr__(self, "delimiter", delimiter)
        return self


class Optional(Kind):
    __slots__ = ("element",)
    __fields__ = ("element",)

    def __new__(cls, element):
        element = resolve(element)

        self = super().__new__(cls)
        object.__setattr__(self, "element", element)
        return self


int8 = Integral(8)
int16 = Integral(16)
int32 = Integral(32)
int64 = Integral(64)
uint8 = Integral(8, False)
uint16 = Integral(16, False)
uint32 = Integral(32, False)
uint64 = Integral(64, False)
boolean = Boolean()
character = Character()


def split_fields(text, delimiter=DEFAULT_DELIMITER, /):
    """
    split a sequence payload into its fields.

    rules
    - an empty payload has no fields at all.
    - a single trailing delimiter does not open a new field ("1,2," -> 1, 2).
    - empty fields elsewhere are kept ("1,,3" -> "1", "", "3") so the element
      converter gets to reject them.
    """
    if not text:
        return []
    fields = text.split(delimiter)
    if not fields[-1]:
        fields.pop()
    return fields


def _convert_scalar(text, factory, /):
    # A formatted read of nothing always fails, whatever the target type.
    if not text:
        raise ArgBadTypeException(text)
    try:
        return factory(text)
    except (ValueError, TypeError, ArithmeticError) as exception:
        raise ArgBadTypeException(text) from exception


def convert(text, kind, /):
    """
    Convert a textual payload into a value of the given kind.

    Parameters
    - text: str
      The payload, as found after "=" or in the next command-line token.
    - kind: Kind
      Target type; see the module docstring.

    Returns
    - int, bool, str, list or whatever the scalar factory builds.

    Raises
    - ArgBadTypeException when the payload does not convert. For sequences,
      the first failing field aborts the conversion.
    - TypeError when text is not a string or kind is not a Kind.
    """
    if not isinstance(text, str):
        raise TypeError("convert() first argument must be a string")

    match kind:
        case Integral():
            return parse_integral(text, kind)
        case Boolean():
            return parse_boolean(text)
        case Character():
            return parse_character(text)
        case Scalar(factory=factory):
            return _convert_scalar(text, factory)
        case Sequence(element=element, delimiter=delimiter):
            return [convert(field, element) for field in split_fields(text, delimiter)]
        case Optional(element=element):
            return convert(text, element)
        case _:
            raise TypeError("convert() second argument must be a kind")


def resolve(annotation, /):
    """
    Map a Python annotation to a kind.

    - Kind instances are returned unchanged.
    - bool -> boolean, int -> int64.
    - list[T] -> Sequence(resolve(T)).
    - T | None, typing.Optional[T] -> Optional(resolve(T)).
    - any other callable (float, str, pathlib.Path, ...) -> Scalar(annotation).
    """
    if isinstance(annotation, Kind):
        return annotation
    if annotation is bool:
        return boolean
    if annotation is int:
        return int64

    origin, arguments = typing.get_origin(annotation), typing.get_args(annotation)

    if origin is list and len(arguments) == 1:
        return Sequence(arguments[0])

    if origin in (types.UnionType, typing.Union) and type(None) in arguments:
        remaining = [argument for argument in arguments if argument is not type(None)]
        if len(remaining) == 1:
            return Optional(remaining[0])

    if origin is None and callable(annotation):
        return Scalar(annotation)

    raise TypeError(f"resolve() argument must be a kind or a supported annotation, not {annotation!r}")


__all__ = (
    "DEFAULT_DELIMITER",
    "default_delimiter",
    "Kind",
    "Integral",
    "Boolean",
    "Character",
    "Scalar",
    "Sequence",
    "Optional",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "boolean",
    "character",
    "split_fields",
    "convert",
    "resolve",
)
