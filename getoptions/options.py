r"""
getoptions option definitions and destinations.

Overview
- Kind: what an option accumulates (boolean, negatable boolean, string, integer,
  string list, string map).
- Arity: whether an option takes no value, a required value, or an optional value
  that falls back to its default.
- Var: the destination slot of one option. Callers may create their own Var and
  pass it at registration to bind it, or let the registry allocate one; either way
  the Var is read-only from the outside and only the accumulator writes it.
- Definition: one declared option (canonical name, aliases, kind, arity, default,
  destination), sanitized on construction.

Validation highlights
- Names must be non-empty strings without whitespace and without "=" (the inline
  value separator). Dashes belong to the token, not the name: "verbose" is typed
  as "--verbose", while a name of "-" matches the lone "-" token.
- Booleans have no arity; every other kind must take a value. Lists and maps
  only accept a required value.
- Defaults are type-checked against the kind and stored as detached copies.
"""
import re
from collections.abc import Iterable, Mapping
from enum import Enum

from .utils import *


class Kind(Enum):
    BOOLEAN = "boolean"
    NEGATABLE_BOOLEAN = "negatable-boolean"
    STRING = "string"
    INTEGER = "integer"
    STRING_LIST = "string-list"
    STRING_MAP = "string-map"


class Arity(Enum):
    NONE = "none"
    REQUIRED = "required"
    OPTIONAL = "optional"


# Kinds whose presence alone is the value.
_FLAGS = frozenset({Kind.BOOLEAN, Kind.NEGATABLE_BOOLEAN})

# Kinds that accumulate across occurrences.
_REPEATABLE = frozenset({Kind.STRING_LIST, Kind.STRING_MAP})

_PREFIX = "no-"


class Var:
    """
    Destination slot for one option's value.

    The value property hands out detached copies, so the only way to change what
    a Var holds is through the parser that owns it.

    Example
        >>> verbose = Var()
        >>> getopt.boolean("verbose", var=verbose)
        >>> getopt.parse(["--verbose"])
        >>> verbose.value
        True
    """

    __slots__ = ("_value", "_owner")

    value = mirror("value")

    def __init__(self):
        self._value = None
        self._owner = Unset

    @property
    def bound(self):
        """True once the Var belongs to an option definition."""
        return self._owner is not Unset

    def __repr__(self):
        return f"Var({self._value!r})"


def _sanitize_name(name, /):
    if not isinstance(name, str):
        raise TypeError("option names must be strings")
    elif not name:
        raise ValueError("option names cannot be empty-strings")
    elif re.search(r"[\s=]", name):
        raise ValueError(f"option name {name!r} cannot contain whitespace or '='")
    return name


def _sanitize_default(kind, default, /):
    """
    Validate a default against its kind and return a private copy of it.
    """
    match kind:
        case Kind.BOOLEAN | Kind.NEGATABLE_BOOLEAN:
            if not isinstance(default, bool):
                raise TypeError(f"{kind.value} option default must be a bool")
        case Kind.STRING:
            if not isinstance(default, str):
                raise TypeError(f"{kind.value} option default must be a string")
        case Kind.INTEGER:
            if not isinstance(default, int) or isinstance(default, bool):
                raise TypeError(f"{kind.value} option default must be an integer")
        case Kind.STRING_LIST:
            if isinstance(default, str) or not isinstance(default, Iterable):
                raise TypeError(f"{kind.value} option default must be an iterable of strings")
            default = tuple(default)
            if not all(isinstance(item, str) for item in default):
                raise TypeError(f"{kind.value} option default must only contain strings")
        case Kind.STRING_MAP:
            if not isinstance(default, Mapping):
                raise TypeError(f"{kind.value} option default must be a mapping")
            if not all(isinstance(item, str) for item in [*default.keys(), *default.values()]):
                raise TypeError(f"{kind.value} option default must map strings to strings")
            default = dict(default)
    return default


class Definition:
    """
    One declared option.

    Properties
    - name: canonical name, the key used in results.
    - aliases: alternate names resolving to the same option.
    - kind / arity / default: what the option stores and how it takes values.
    - var: the destination slot.
    - names: canonical name followed by aliases, as typed on the command line.
    - negations: implicit "no-" names of a negatable boolean (empty otherwise).
    """

    __slots__ = ("_name", "_aliases", "_kind", "_arity", "_default", "_var")

    name = mirror("name")
    aliases = mirror("aliases")
    kind = mirror("kind")
    arity = mirror("arity")
    default = mirror("default")

    def __init__(self, name, /, *aliases, kind, arity=Unset, default, var=Unset):
        if not isinstance(kind, Kind):
            raise TypeError("option 'kind' must be a Kind")

        arity = coalesce(arity, Arity.NONE if kind in _FLAGS else Arity.REQUIRED)
        if not isinstance(arity, Arity):
            raise TypeError("option 'arity' must be an Arity")
        if (kind in _FLAGS) != (arity is Arity.NONE):
            raise ValueError(f"{kind.value} option cannot have {arity.value} arity")
        if kind in _REPEATABLE and arity is Arity.OPTIONAL:
            raise ValueError(f"{kind.value} option requires a value")

        name = _sanitize_name(name)

        seen = {name}
        for alias in aliases:
            if _sanitize_name(alias) in seen:
                raise ValueError(f"option {name!r} aliases cannot contain duplicates")
            seen.add(alias)

        var = coalesce(var, Var())
        if not isinstance(var, Var):
            raise TypeError("option 'var' must be a Var")
        if var.bound:
            raise ValueError(f"option {name!r} destination is already bound to {var._owner.name!r}")

        self._name = name
        self._aliases = aliases
        self._kind = kind
        self._arity = arity
        self._default = _sanitize_default(kind, default)
        self._var = var  # Bound by Registry.register()

    @property
    def var(self):
        return self._var

    @property
    def names(self):
        return (self._name, *self._aliases)

    @property
    def negations(self):
        if self._kind is Kind.NEGATABLE_BOOLEAN:
            return (_PREFIX + self._name,)
        return ()

    @property
    def flag(self):
        """True for kinds that never consume a value."""
        return self._arity is Arity.NONE

    def initial(self):
        """
        Return a fresh value for the start of a parse (lists/maps are new containers).
        """
        match self._kind:
            case Kind.STRING_LIST:
                return list(self._default)
            case Kind.STRING_MAP:
                return dict(self._default)
        return self._default

    def __rich_repr__(self):
        yield "name", self._name
        yield "aliases", self._aliases
        yield "kind", self._kind.value
        yield "arity", self._arity.value
        yield "default", self._default

    def __repr__(self):
        return "definition(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "Kind",
    "Arity",
    "Var",
    "Definition",
)
