"""
Argosy faults (errors and warnings) and rendering.

Scope
- FaultCode: the single, stable enumeration of every condition the library
  reports. Codes are grouped by domain so logs and searches stay predictable.
- ArgumentFault / ArgumentWarning: base types carrying a message plus a
  read-only mapping of structured fields (flag, value, expected, token, index,
  character, ...). One thin subclass per code exists for `except` clauses.
- ParseExit: an ExceptionGroup bundling every error found in one parse pass.
- trigger(): central entry point to surface a fault (raise, or render + exit
  in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Presentation
- Faults know how to render themselves with rich (`__rich__`), but the core
  never prints on its own: rendering only happens in shell mode or when a host
  prints a fault explicitly.
- Styling can be overridden through a `__styles__` mapping in `__main__`, the
  program name through `__prog__`, code labels through `__codes__`.
"""
import copy
import os.path
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - registration (201xx)
      • INCORRECT_FLAG_SYNTAX, DUPLICATED_FLAG, UNKNOWN_VALUE_TYPE
    - classification (202xx)
      • INVALID_FLAG, CANNOT_CARRY_VALUE
    - values (203xx)
      • WRONG_VALUE_TYPE, MISSING_VALUE
    - retrieval (204xx)
      • NO_REMAINING_ARGUMENTS, NO_ARGUMENT_OF_REQUIRED_TYPE
    - containers (205xx)
      • LIST_INDEX_OUT_OF_BOUNDS, EMPTY_LIST
    - warnings (209xx)
      • EMPTY_VALUE
    """
    # --- registration errors (201xx) ---
    INCORRECT_FLAG_SYNTAX        = 20101
    DUPLICATED_FLAG              = 20102
    UNKNOWN_VALUE_TYPE           = 20103

    # --- classification errors (202xx) ---
    INVALID_FLAG                 = 20201
    CANNOT_CARRY_VALUE           = 20202

    # --- value errors (203xx) ---
    WRONG_VALUE_TYPE             = 20301
    MISSING_VALUE                = 20302

    # --- retrieval errors (204xx) ---
    NO_REMAINING_ARGUMENTS       = 20401
    NO_ARGUMENT_OF_REQUIRED_TYPE = 20402

    # --- container errors (205xx) ---
    LIST_INDEX_OUT_OF_BOUNDS     = 20501
    EMPTY_LIST                   = 20502

    # --- warnings (209xx) ---
    EMPTY_VALUE                  = 20901

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _program():
    return getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) or "argosy")


def _render(fault, palette, /):
    """
    build the rich renderable shared by errors and warnings.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
    colorful = fault.options["colorful"]

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    header = Text.assemble(
        "[ ",
        text(_program(), "prog-name"),
        " — ",
        text(fault.code.normalize() if isinstance(fault.code, FaultCode) else "?", "code"),
        " | ",
        text(fault.options["title"].title(), "title"),
        " ]"
    )
    message = text(fault.message, "message")
    parts = [message]
    if fault.options["hint"]:
        parts.append(Text.assemble(text(" → ", "hint-arrow"), text(fault.options["hint"], "hint")))

    if fault.options["fancy"]:
        width = console.width - 4
        try:
            width = int(width * fault.options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(*parts), title=header, title_align="left", width=width)

    return Group(header, *parts)


class ArgumentFault(Exception):
    """
    base type for every error raised by argosy.

    structure
    - message: one-sentence, lowercased description.
    - options: read-only mapping of structured fields. always present:
      code, title, hint, shell, fancy, colorful. subclasses add domain fields
      such as flag, value, expected, token, index, character, size.
    - structured fields are also readable as attributes (fault.flag, fault.index).
    """
    __code__ = Unset
    __title__ = "argument fault"

    def __init__(self, message, /, **options):
        assert isinstance(message, str | Text)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "code": coalesce(type(self).__code__),
            "title": type(self).__title__,
            "hint": None,
            "shell": False,
            "fancy": False,
            "colorful": True,
        } | options)

    def __getattr__(self, name, /):
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        clone = type(self)(self.message, **{**self.options, **overrides})
        clone.__cause__ = self.__cause__
        return clone


class IncorrectFlagSyntaxError(ArgumentFault):
    __code__ = FaultCode.INCORRECT_FLAG_SYNTAX
    __title__ = "incorrect flag syntax"

class DuplicatedFlagError(ArgumentFault):
    __code__ = FaultCode.DUPLICATED_FLAG
    __title__ = "duplicated flag"

class UnknownValueTypeError(ArgumentFault):
    __code__ = FaultCode.UNKNOWN_VALUE_TYPE
    __title__ = "unknown value type"

class InvalidFlagError(ArgumentFault):
    __code__ = FaultCode.INVALID_FLAG
    __title__ = "invalid flag"

class CannotCarryValueError(ArgumentFault):
    __code__ = FaultCode.CANNOT_CARRY_VALUE
    __title__ = "flag cannot carry a value"

class WrongValueTypeError(ArgumentFault):
    __code__ = FaultCode.WRONG_VALUE_TYPE
    __title__ = "wrong value type"

class MissingValueError(ArgumentFault):
    __code__ = FaultCode.MISSING_VALUE
    __title__ = "missing value"

class NoRemainingArgumentsError(ArgumentFault):
    __code__ = FaultCode.NO_REMAINING_ARGUMENTS
    __title__ = "no remaining arguments"

class NoArgumentOfRequiredTypeError(ArgumentFault):
    __code__ = FaultCode.NO_ARGUMENT_OF_REQUIRED_TYPE
    __title__ = "no argument of required type"

class ListIndexOutOfBoundsError(ArgumentFault):
    __code__ = FaultCode.LIST_INDEX_OUT_OF_BOUNDS
    __title__ = "index out of bounds"

class EmptyListError(ArgumentFault):
    __code__ = FaultCode.EMPTY_LIST
    __title__ = "empty list"


class ArgumentWarning(Warning):
    """
    base type for non-fatal conditions; same structure as ArgumentFault.
    """
    __code__ = Unset
    __title__ = "argument warning"

    def __init__(self, message, /, **options):
        assert isinstance(message, str | Text)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "code": coalesce(type(self).__code__),
            "title": type(self).__title__,
            "hint": None,
            "shell": False,
            "fancy": False,
            "colorful": True,
        } | options)

    def __getattr__(self, name, /):
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            return warnings.warn(self, stacklevel=5)
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyValueWarning(ArgumentWarning):
    __code__ = FaultCode.EMPTY_VALUE
    __title__ = "empty attached value"


class ParseExit(ExceptionGroup[ArgumentFault]):
    """
    every error collected during one classification pass, raised at once.

    catch it whole (`except ParseExit`) or by kind (`except* InvalidFlagError`).
    """
    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad arguments", exceptions)

    def __init__(self, exceptions, **options):
        super().__init__("bad arguments", tuple(exceptions))
        self.options = MappingProxyType({
            "shell": False,
            "fancy": False,
            "colorful": True,
        } | options)

    def derive(self, exceptions, /):
        return type(self)(exceptions, **self.options)

    def __rich__(self):
        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "title": "bold #FF4DA6",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style=""):
            return Text(str(fragment), styles[style] if self.options["colorful"] else "")

        header = Text.assemble("[ ", text(_program(), "prog-name"), " — ", text(self.message.title(), "title"), " ]")
        renders = [copy.replace(exception, fancy=self.options["fancy"], colorful=self.options["colorful"], ratio=2/3) for exception in self.exceptions]

        if self.options["fancy"]:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options).
    - outside shell mode errors are raised and warnings are warned; in shell
      mode both are rendered on stderr and errors exit with status 1.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode members and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ArgumentFault",
    "IncorrectFlagSyntaxError",
    "DuplicatedFlagError",
    "UnknownValueTypeError",
    "InvalidFlagError",
    "CannotCarryValueError",
    "WrongValueTypeError",
    "MissingValueError",
    "NoRemainingArgumentsError",
    "NoArgumentOfRequiredTypeError",
    "ListIndexOutOfBoundsError",
    "EmptyListError",
    "ArgumentWarning",
    "EmptyValueWarning",
    "ParseExit",
    "trigger",
    "getdoc",
)
