r"""
Argot grammars: the textual shapes the engine recognizes.

Overview
- Specifier grammar (declaration time)
  • split_specifier("x, long-name") -> ("x", "long-name")
  • Accepted forms: "x,long", "x, long", "x", "long"; either side may be empty
    but never both.
- Matcher grammar (parse time, once per raw token)
  • match_argument("--name=value") -> ArgumentDescriptor("name", False, True, "value")
  • match_argument("-abc")         -> ArgumentDescriptor("abc", True, False, "")
  • Anything else yields None; the caller decides whether it is a positional.
  • Clustered short flags ("-abc") are reported as one run. Telling three flags
    apart from one flag with an inline value needs the option table, so it is
    left to the registry that owns it.
- Integer lexer
  • split_integer("-0x1A") -> IntegerDescriptor("-", "0x", "1A")
- Boolean grammars
  • is_true_text / is_false_text, each with its own pattern.

Compiled patterns
- Patterns are compiled on first use and cached for the whole process.
  Compilation happens under a lock, so concurrent first uses of the same
  grammar still publish a single compiled object; reads afterwards are lock-free.

Character classes
- "alnum" means ASCII letters and digits only ([0-9A-Za-z]); unicode letters
  are not accepted in option names.
"""
import re
import threading
from types import MappingProxyType
from typing import NamedTuple

from .faults import ArgBadTypeException, ArgInvalidException, ArgSyntaxException

PATTERNS = MappingProxyType({
    "integer": r"(-)?(0x)?([0-9a-zA-Z]+)|((0x)?0)",
    "truthy": r"(t|T)(rue)?|1",
    "falsy": r"(f|F)(alse)?|0",
    "specifier": r"(([0-9A-Za-z]),)?[ ]*([0-9A-Za-z][-_0-9A-Za-z]*)?",
    "matcher": r"--([0-9A-Za-z][-_0-9A-Za-z]+)(=(.*))?|-([0-9A-Za-z]+)",
})

_compiled = {}
_lock = threading.Lock()


class ArgumentDescriptor(NamedTuple):
    """
    One matched command-line token.

    - arg_name: the long name, or the whole run of clustered short flags.
    - grouping: True for the single-hyphen form ("-abc").
    - set_value: True when an explicit "=value" was present (even if empty).
    - value: the text after "=", or "" when absent.
    """
    arg_name: str
    grouping: bool
    set_value: bool
    value: str


class IntegerDescriptor(NamedTuple):
    """
    A numeric literal split into its sign, base prefix and digit run.
    """
    negative: str
    base: str
    value: str


def grammar(name, /):
    """
    return the compiled pattern registered under `name`, compiling it once.

    parameters
    - name: one of the keys of PATTERNS.

    errors
    - ValueError when the name is not a known grammar.
    """
    try:
        return _compiled[name]
    except KeyError:
        pass

    if name not in PATTERNS:
        raise ValueError(f"grammar() argument must be one of {', '.join(map(repr, PATTERNS))}")

    with _lock:
        # Another thread may have won the race while we were waiting.
        if (compiled := _compiled.get(name)) is None:
            compiled = _compiled[name] = re.compile(PATTERNS[name])
        return compiled


def split_specifier(text, /):
    """
    split a declaration string into its (short, long) names.

    rules
    - "x,long" / "x, long": short "x", long "long".
    - "x" or "x,": a lone alphanumeric is the short name.
    - "long": long name only; it must start with an alphanumeric and may
      contain '-' and '_'.
    - "", "-bad", "ab,long": ArgInvalidException.
    """
    if not isinstance(text, str):
        raise TypeError("split_specifier() argument must be a string")

    match = grammar("specifier").fullmatch(text)
    if match is None:
        raise ArgInvalidException(text)

    short, long = match.group(2) or "", match.group(3) or ""

    if not short and len(long) == 1:
        short, long = long, ""

    if not short and not long:
        raise ArgInvalidException(text)

    return short, long


def match_argument(text, /):
    """
    match one raw command-line token against the long and short forms.

    returns
    - ArgumentDescriptor when the token is an option token.
    - None when it is not (positionals, "-", "--", "--x", "-x=1", ...).
    """
    if not isinstance(text, str):
        raise TypeError("match_argument() argument must be a string")

    match = grammar("matcher").fullmatch(text)
    if match is None:
        return None

    if match.group(4):
        return ArgumentDescriptor(match.group(4), True, False, "")

    return ArgumentDescriptor(match.group(1), False, match.group(2) is not None, match.group(3) or "")


def require_argument(text, /):
    """
    like match_argument(), but a non-matching token is an ArgSyntaxException.
    """
    if (descriptor := match_argument(text)) is None:
        raise ArgSyntaxException(text)
    return descriptor


def split_integer(text, /):
    """
    split a numeric literal into sign, base prefix and digit run.

    The digit run is only checked to be alphanumeric here; digit validity for
    the base is decided while accumulating (see argot.integers).

    errors
    - ArgBadTypeException when the text is not an integer literal at all
      (empty, whitespace, punctuation, "--1", ...).
    """
    match = grammar("integer").fullmatch(text)
    if match is None:
        raise ArgBadTypeException(text)

    if match.group(4):
        return IntegerDescriptor("", match.group(5) or "", "0")

    return IntegerDescriptor(match.group(1) or "", match.group(2) or "", match.group(3))


def is_true_text(text, /):
    return grammar("truthy").fullmatch(text) is not None


def is_false_text(text, /):
    return grammar("falsy").fullmatch(text) is not None


__all__ = (
    "ArgumentDescriptor",
    "IntegerDescriptor",
    "grammar",
    "split_specifier",
    "match_argument",
    "require_argument",
    "split_integer",
    "is_true_text",
    "is_false_text",
)
