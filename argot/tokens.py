"""
Argot tokens: value sinks bound to one declared option.

A Token owns
- a kind (the conversion target, see argot.kinds),
- an optional default value text (used when the option is absent),
- an optional implicit value text (used when the option is present without payload),
- the parsed state: the converted value and how many payloads were parsed.

Variants (one per kind class)
- IntegralToken, BooleanToken, CharacterToken, ScalarToken, OptionalToken:
  each parse overwrites the stored value.
- SequenceToken: each parse appends the converted fields, left to right.

Tokens are shared by reference: the registry that declared the option and any
caller holding it see the same object. Mutation is not synchronized.

Quick example
    >>> threads = token(int32, name="threads").default_value("4").implicit_value("1")
    >>> threads.parse("0x10")
    >>> threads.value
    16
    >>> threads.clone().value is None
    True
"""
from abc import ABC, abstractmethod

from .faults import ArgNotPresentException, ArgNotSatisfiedException, EmptyValueWarning, trigger
from .kinds import Integral, Boolean, Character, Scalar, Sequence, Optional, convert, resolve
from .utils import Unset, coalesce, mirror


class Token(ABC):
    """
    Abstract value sink.

    Subclasses define __kind__ (the kind class they accept) and _store(), which
    commits one converted payload into the parsed state.
    """
    __kind__ = ()

    kind = mirror("kind")
    name = mirror("name")
    value = mirror("value")
    count = mirror("count")

    def __init__(self, kind, /, *, name=Unset):
        if not isinstance(kind, self.__kind__):
            raise TypeError(f"{type(self).__name__} cannot hold {kind!r}")
        if not isinstance(name, str | Unset):
            raise TypeError(f"{type(self).__name__} 'name' must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError(f"{type(self).__name__} 'name' cannot be empty")

        self._kind = kind
        self._name = coalesce(name, kind.__typename__)
        self._default = Unset
        self._implicit = Unset
        self._reset()

    def _reset(self):
        self._value = None
        self._count = 0

    @abstractmethod
    def _store(self, value, /):
        raise NotImplementedError

    @abstractmethod
    def is_container(self):
        raise NotImplementedError

    def is_boolean(self):
        return False

    def has_default_value(self):
        return self._default is not Unset

    def has_implicit_cast(self):
        return self._implicit is not Unset

    def get_default_value(self):
        return coalesce(self._default, "")

    def get_implicit_value(self):
        return coalesce(self._implicit, "")

    def default_value(self, text, /):
        """
        Set the value used when the option is not supplied.

        The text is converted right away, so a malformed default is rejected
        when the option is declared. Returns the token itself for chaining.
        """
        convert(text, self._kind)
        self._default = text
        return self

    def implicit_value(self, text, /):
        """
        Set the value used when the option is supplied without a payload.

        Validated eagerly, like default_value(). Returns the token itself.
        """
        convert(text, self._kind)
        self._implicit = text
        return self

    def parse(self, text=Unset, /):
        """
        Convert one payload and store it.

        - parse(text): scalars overwrite, sequences append.
        - parse(): apply the implicit value; ArgNotSatisfiedException when
          none was configured.
        """
        if text is Unset:
            if self._implicit is Unset:
                raise ArgNotSatisfiedException(self._name)
            text = self._implicit

        self._store(convert(text, self._kind))
        self._count += 1

    def parse_default(self):
        """
        Apply the default value without counting it as a supplied payload.
        """
        if self._default is Unset:
            raise ArgNotPresentException(self._name)
        self._store(convert(self._default, self._kind))

    def clone(self):
        """
        Return an independent token with the same kind, name, default and
        implicit value, and no parsed state.
        """
        clone = type(self)(self._kind, name=self._name)
        clone._default = self._default
        clone._implicit = self._implicit
        return clone

    def __rich_repr__(self):
        yield "kind", self._kind
        yield "name", self._name
        yield "default", self._default
        yield "implicit", self._implicit
        yield "value", self.value

    def __repr__(self):
        return f"{type(self).__name__}({', '.join('%s=%r' % field for field in self.__rich_repr__())})"


class _SingleToken(Token):
    def _store(self, value, /):
        self._value = value

    def is_container(self):
        return False


class IntegralToken(_SingleToken):
    __kind__ = Integral


class BooleanToken(_SingleToken):
    __kind__ = Boolean

    def is_boolean(self):
        return True


class CharacterToken(_SingleToken):
    __kind__ = Character


class ScalarToken(_SingleToken):
    __kind__ = Scalar


class OptionalToken(_SingleToken):
    """
    Holds None until a payload is parsed; parsing always yields a present value.
    """
    __kind__ = Optional


class SequenceToken(Token):
    __kind__ = Sequence

    def _reset(self):
        self._value = []
        self._count = 0

    def _store(self, value, /):
        if not value:
            trigger(EmptyValueWarning(self._name))
        self._value.extend(value)

    def is_container(self):
        return True


_VARIANTS = {
    Integral: IntegralToken,
    Boolean: BooleanToken,
    Character: CharacterToken,
    Scalar: ScalarToken,
    Sequence: SequenceToken,
    Optional: OptionalToken,
}


def token(kind, /, *, name=Unset):
    """
    Build the token variant matching a kind (or a Python annotation).

    Examples
    - token(int32)                     -> IntegralToken
    - token(bool)                      -> BooleanToken
    - token(list[int], name="ports")   -> SequenceToken over int64
    - token(float | None)              -> OptionalToken over Scalar(float)
    """
    kind = resolve(kind)
    return _VARIANTS[type(kind)](kind, name=name)


__all__ = (
    "Token",
    "IntegralToken",
    "BooleanToken",
    "CharacterToken",
    "ScalarToken",
    "OptionalToken",
    "SequenceToken",
    "token",
)
