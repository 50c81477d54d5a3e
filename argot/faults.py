"""
Argot faults (errors and warnings) and rendering.

Scope
- ParserException: root of every error raised by the tokenizer and converters.
  It splits in two branches:
  • SpecifyArgException: raised while an option is being declared
    (duplicated names, malformed specifier strings).
  • ParseArgException: raised while actual command-line input is interpreted
    (bad syntax, unknown options, missing/rejected/empty values, bad types).
- ParserWarning: non-fatal conditions (e.g., an empty payload for a sequence).
- render(): build a rich renderable for any fault.
- trigger(): central entry point to surface a fault (raise/warn or print).

Messages
- Every message is a fixed template followed by the offending text wrapped in
  quote glyphs: ASCII single-quotes on Windows, typographic marks elsewhere.
- The offending text is kept verbatim in the `what` attribute.

Integration
- The engine raises faults directly; hosts (option registries, CLIs) catch
  ParserException and may hand it to trigger(fault, shell=True) to print it.
"""
import re
import sys
import warnings
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)

if sys.platform == "win32":
    QUOTES = ("'", "'")
else:
    QUOTES = ("‘", "’")


def quote(what, /):
    """
    wrap the offending text in the platform quote glyphs.
    """
    if not isinstance(what, str):
        raise TypeError("quote() argument must be a string")
    return QUOTES[0] + what + QUOTES[1]


class ParserException(Exception):
    def __init__(self, message, /):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        # "ArgBadTypeException" -> "arg bad type"
        cls.__title__ = re.sub(r"(?<!^)(?=[A-Z])", r" ", cls.__name__.removesuffix("Exception")).lower()

    def __str__(self):
        return self.message

    def __rich__(self):
        return render(self)


ParserException.__title__ = "parser"


class SpecifyArgException(ParserException): ...
class ParseArgException(ParserException): ...


class ArgDuplicateException(SpecifyArgException):
    def __init__(self, what, /):
        super().__init__("Arg already exists: " + quote(what))
        self.what = what


class ArgInvalidException(SpecifyArgException):
    def __init__(self, what, /):
        super().__init__("Arg has invalid format: " + quote(what))
        self.what = what


class ArgSyntaxException(ParseArgException):
    def __init__(self, what, /):
        super().__init__("Arg has incorrect syntax: " + quote(what))
        self.what = what


class ArgFakeException(ParseArgException):
    def __init__(self, what, /):
        super().__init__("Arg does not exists: " + quote(what))
        self.what = what


class ArgMissingException(ParseArgException):
    def __init__(self, what, /):
        super().__init__("Arg is missing an argument: " + quote(what))
        self.what = what


class ArgNotSatisfiedException(ParseArgException):
    def __init__(self, what, /):
        super().__init__("Arg is not satisfied: " + quote(what))
        self.what = what


class ArgRejectException(ParseArgException):
    def __init__(self, what, given, /):
        super().__init__("Arg is reject to give: " + quote(what) + "\n\tbut still given: " + quote(given))
        self.what = what
        self.given = given


class ArgNotPresentException(ParseArgException):
    def __init__(self, what, /):
        super().__init__("Arg not present: " + quote(what))
        self.what = what


class ArgEmptyException(ParseArgException):
    def __init__(self, what, /):
        super().__init__("Arg is empty: " + quote(what))
        self.what = what


class ArgBadTypeException(ParseArgException):
    def __init__(self, what, /):
        super().__init__("Arg has a bad type and failed to parse: " + quote(what))
        self.what = what


class ParserWarning(Warning):
    def __init__(self, message, /):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        cls.__title__ = re.sub(r"(?<!^)(?=[A-Z])", r" ", cls.__name__.removesuffix("Warning")).lower()

    def __str__(self):
        return self.message

    def __rich__(self):
        return render(self)


ParserWarning.__title__ = "parser"


class EmptyValueWarning(ParserWarning):
    def __init__(self, what, /):
        super().__init__("Arg was given an empty value: " + quote(what))
        self.what = what


def render(fault, /, *, fancy=False, colorful=True):
    """
    build a rich renderable for a fault.

    layout
    - header: "[ <branch> | <title> ]", where branch is "specification error",
      "parse error" or "warning" and title is derived from the class name.
    - body: the rendered message (multi-line messages are kept as-is).

    styles
    - the host application may provide a __styles__ mapping in __main__ to
      override any of the style keys used below.
    """
    main = __import__("__main__")

    if isinstance(fault, ParserWarning):
        branch = "warning"
    elif isinstance(fault, SpecifyArgException):
        branch = "specification error"
    elif isinstance(fault, ParseArgException):
        branch = "parse error"
    elif isinstance(fault, ParserException):
        branch = "error"
    else:
        raise TypeError("render() argument must be a parser exception or warning")

    styles = defaultdict(str, {
        "branch": "bold #FFB400" if branch == "warning" else "bold #00E5FF",
        "title": "bold #FFC2E0" if branch == "warning" else "bold #FF4DA6",
        "message": "#C8C8D0",
    } | getattr(main, "__styles__", {}))

    def text(fragment, style):
        return Text(fragment, styles[style] if colorful else "")

    header = Text.assemble("[ ", text(branch, "branch"), " | ", text(type(fault).__title__, "title"), " ]")
    message = text(fault.message, "message")

    if fancy:
        return Panel(message, title=header, title_align="left")
    return Group(header, message)


def trigger(fault, /, *, shell=False, fancy=False, colorful=True, deferred=False):
    """
    surface a fault.

    contract
    - outside shell mode, exceptions are raised and warnings are emitted
      through warnings.warn (so they honour the active warning filters).
    - in shell mode, the fault is printed on stderr through rich; exceptions
      then terminate the process with status 1 unless deferred is True.
    """
    if not isinstance(fault, ParserException | ParserWarning):
        raise TypeError("trigger() argument must be a parser exception or warning")

    if not shell:
        if isinstance(fault, ParserWarning):
            return warnings.warn(fault, stacklevel=3)
        raise fault

    console.print(render(fault, fancy=fancy, colorful=colorful))
    if isinstance(fault, ParserException) and not deferred:
        sys.exit(1)


__all__ = (
    "ParserException",
    "SpecifyArgException",
    "ParseArgException",
    "ArgDuplicateException",
    "ArgInvalidException",
    "ArgSyntaxException",
    "ArgFakeException",
    "ArgMissingException",
    "ArgNotSatisfiedException",
    "ArgRejectException",
    "ArgNotPresentException",
    "ArgEmptyException",
    "ArgBadTypeException",
    "ParserWarning",
    "EmptyValueWarning",
    "quote",
    "render",
    "trigger",
)
