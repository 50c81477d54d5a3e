"""
Argot integer, boolean and character converters.

Integers
- parse_integral(text, kind) converts a literal into an int that fits the
  integral kind (width in bits, signed or unsigned):
  1. lex: "-"? "0x"? run  (see argot.grammars.split_integer)
  2. accumulate the run left to right as an unsigned value of `width` bits;
     hex runs take 0-9/a-f/A-F, decimal runs take 0-9. Each step is checked
     before it is committed, so a literal wider than the kind is rejected
     instead of wrapping around.
  3. range check for signed kinds: a negative magnitude may reach 2**(width-1),
     a non-negative one 2**(width-1) - 1.
  4. apply the sign. A negative literal (even "-0") never fits an unsigned kind.

Booleans and characters bypass the integer path entirely.

Every failure raises ArgBadTypeException carrying the whole original text.
"""
from .faults import ArgBadTypeException
from .grammars import split_integer, is_true_text, is_false_text


def _digit(char, hexadecimal, /):
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if hexadecimal and "a" <= char <= "f":
        return ord(char) - ord("a") + 10
    if hexadecimal and "A" <= char <= "F":
        return ord(char) - ord("A") + 10
    return None


def _accumulate(text, descriptor, width, /):
    hexadecimal = bool(descriptor.base)
    radix = 16 if hexadecimal else 10
    limit = (1 << width) - 1

    result = 0
    for char in descriptor.value:
        if (digit := _digit(char, hexadecimal)) is None:
            raise ArgBadTypeException(text)
        # overflow guard: the working value is `width` bits wide
        if (next := result * radix + digit) > limit:
            raise ArgBadTypeException(text)
        result = next

    return result


def _check_range(text, magnitude, negative, kind, /):
    if not kind.signed:
        return
    if negative:
        if magnitude > -kind.minimum:
            raise ArgBadTypeException(text)
    elif magnitude > kind.maximum:
        raise ArgBadTypeException(text)


def parse_integral(text, kind, /):
    """
    Convert an integer literal into a value of the given integral kind.

    Parameters
    - text: str
      The literal, e.g. "26", "0x1A", "-5", "0".
    - kind: argot.kinds.Integral
      Target width and signedness.

    Returns
    - int within [kind.minimum, kind.maximum].

    Examples
    - parse_integral("0x1A", int32)  -> 26
    - parse_integral("-128", int8)   -> -128
    - parse_integral("-5", uint8)    -> ArgBadTypeException
    - parse_integral("256", uint8)   -> ArgBadTypeException
    """
    descriptor = split_integer(text)
    negative = bool(descriptor.negative)

    magnitude = _accumulate(text, descriptor, kind.width)
    _check_range(text, magnitude, negative, kind)

    if negative:
        if not kind.signed:
            raise ArgBadTypeException(text)
        return -magnitude

    return magnitude


def parse_boolean(text, /):
    """
    "t", "T", "true", "True", "1" -> True; "f", "F", "false", "False", "0" -> False.
    """
    if is_true_text(text):
        return True
    if is_false_text(text):
        return False
    raise ArgBadTypeException(text)


def parse_character(text, /):
    if len(text) != 1:
        raise ArgBadTypeException(text)
    return text


__all__ = (
    "parse_integral",
    "parse_boolean",
    "parse_character",
)
