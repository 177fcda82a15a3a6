"""
Token classification: decide whether a raw argument names options.

classify(token, mode) returns (names, value):
- names: tuple of candidate option names encoded by the token (empty for a
  positional argument).
- value: the inline value ("--name=value"), or None when there is none.

Dash conventions
- "-" and "--" are literal candidates of their own, never split.
- "--name[=value]" is a long option in every mode.
- "-xyz" depends on the mode:
  • BUNDLING:    one candidate per character; "-xyz=value" attaches the value to "z".
  • SINGLE_DASH: the first character is the candidate, the rest its inline value.
  • NORMAL:      "xyz" is a single candidate, with "=value" split like a long option.
"""
from enum import Enum


class Mode(Enum):
    BUNDLING = "bundling"
    SINGLE_DASH = "single-dash"
    NORMAL = "normal"


def _split(text, /):
    name, separator, value = text.partition("=")
    return name, (value if separator else None)


def classify(token, mode=Mode.NORMAL, /):
    """
    Return the candidate names and inline value encoded by one token.

    Examples
        >>> classify("--opt=arg", Mode.NORMAL)
        (('opt',), 'arg')
        >>> classify("-opt", Mode.BUNDLING)
        (('o', 'p', 't'), None)
        >>> classify("-opt", Mode.SINGLE_DASH)
        (('o',), 'pt')
        >>> classify("opt", Mode.NORMAL)
        ((), None)
    """
    if not isinstance(token, str):
        raise TypeError("classify() first argument must be a string")
    if not isinstance(mode, Mode):
        raise TypeError("classify() second argument must be a Mode")

    if token in ("-", "--"):
        return (token,), None

    if token.startswith("--"):
        name, value = _split(token[2:])
        return (name,), value

    if not token.startswith("-"):
        return (), None

    rest = token[1:]
    match mode:
        case Mode.BUNDLING:
            names, value = _split(rest)
            # "-=value" still names an (empty, therefore unknown) option
            return tuple(names) or ("",), value
        case Mode.SINGLE_DASH:
            return (rest[0],), (rest[1:] or None)
        case Mode.NORMAL:
            name, value = _split(rest)
            return (name,), value


def is_option(token, mode=Mode.NORMAL, /):
    """True when the token would be read as one or more option names."""
    names, _ = classify(token, mode)
    return bool(names)


__all__ = (
    "Mode",
    "classify",
    "is_option",
)
