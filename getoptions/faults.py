"""
getoptions faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  raised while parsing. Codes are grouped by domain to keep logs searchable.
- ParseError / ParseWarning: base types that carry a message + options and know
  how to render themselves in a friendly, lowercased, and actionable way.
- DuplicateOptionError: configuration fault raised at registration time; it is a
  plain ValueError because it is a programmer error, not something a user typed.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

Integration
- The parser builds a fault with the context it knows (name, literal, index, hint,
  remaining) and calls trigger(fault, **ctx).
- In non-shell mode, errors are raised and warnings go through warnings.warn; in
  shell mode, both are rendered on stderr via rich and errors exit with status 1.
"""
import copy
import inspect
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
    canonical fault codes used by the parser (stable identifiers).

    grouping
    - names (2111x): UNKNOWN_OPTION, AMBIGUOUS_OPTION
    - values (2112x): MISSING_ARGUMENT, CONVERSION_FAILURE, MALFORMED_MAP_ENTRY, BUNDLED_ARGUMENT
    - warnings (2211x): UNKNOWN_OPTION_PASSED
    """
    # --- name resolution errors ---
    UNKNOWN_OPTION        = 21111
    AMBIGUOUS_OPTION      = 21112

    # --- value errors ---
    MISSING_ARGUMENT      = 21121
    CONVERSION_FAILURE    = 21122
    MALFORMED_MAP_ENTRY   = 21123
    BUNDLED_ARGUMENT      = 21124

    # --- warnings ---
    UNKNOWN_OPTION_PASSED = 22111


_ERROR_STYLES = {
    "prog-name": "bold #E6E6F0",
    "code": "bold #00E5FF",
    "title": "bold #FF4DA6",
    "message": "#C8C8D0",
    "hint-arrow": "#9CE19C dim",
    "hint": "italic #9CE19C",
}

_WARNING_STYLES = {
    "prog-name": "bold #E6E6F0",
    "code": "bold #FFB400",
    "title": "bold #FFC2E0",
    "message": "#D6D6DE",
    "hint-arrow": "#B8EFAF dim",
    "hint": "italic #B8EFAF",
}


def _render(fault, palette):
    """
    build the rich renderable shared by errors and warnings.

    the host application may override styles with a __styles__ mapping and the
    program name with __prog__, both looked up in __main__.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        return Text(str(fragment), styles[style] if colorful else "")

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        text(getattr(main, "__prog__", "getoptions"), "prog-name"),
        " — ",
        text(code.value if code is not None else "?", "code"),
        " | ",
        text(options.get("title", type(fault).__name__).title(), "title"),
        " ]"
    )
    message = text(fault.message, "message")
    parts = [message]
    if hint := options.get("hint"):
        parts.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fancy:
        return Panel(Group(*parts), title=header, title_align="left")
    return Group(header, *parts)


class ParseError(Exception):
    """
    base class for every fault that aborts a parse call.

    the message is the human sentence; options carry machine-readable context
    (name, literal, candidates, index, remaining, ...) as a read-only mapping.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def name(self):
        """the option name (or candidate) the fault is about."""
        return self.options.get("name")

    @property
    def remaining(self):
        """positional tokens assembled before the fault was raised."""
        return list(self.options.get("remaining", ()))

    def __rich__(self):
        return _render(self, _ERROR_STYLES)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, message=Unset, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(coalesce(message, self.message), **{**self.options, **overrides})


class UnknownOptionError(ParseError): ...
class AmbiguousOptionError(ParseError): ...
class MissingArgumentError(ParseError): ...
class ConversionError(ParseError): ...
class MalformedMapEntryError(ParseError): ...
class BundledArgumentError(ParseError): ...


class ParseWarning(Warning):
    """
    base class for non-fatal parse feedback (the parse call keeps going).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, _WARNING_STYLES)

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, message=Unset, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(coalesce(message, self.message), **{**self.options, **overrides})


class UnknownOptionWarning(ParseWarning): ...


class DuplicateOptionError(ValueError):
    """
    an option name or alias was registered twice (configuration error).
    """

    def __init__(self, name, /):
        super().__init__(f"option name {name!r} is already in use")
        self.name = name


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into a copy of the fault via copy.replace() before triggering.

    typical options
    - shell, fancy, colorful, title, code, hint, name, literal, index, remaining.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseError",
    "UnknownOptionError",
    "AmbiguousOptionError",
    "MissingArgumentError",
    "ConversionError",
    "MalformedMapEntryError",
    "BundledArgumentError",
    "ParseWarning",
    "UnknownOptionWarning",
    "DuplicateOptionError",
    "trigger",
)
