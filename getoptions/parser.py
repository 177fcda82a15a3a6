"""
getoptions parser: declare options, parse an argument vector, read the results.

What this module provides
- GetOpt: the option registry plus the parse loop.
  • Registration: boolean(), negatable(), string(), string_optional(), integer(),
    integer_optional(), string_list(), string_map(). Each returns the option's
    destination Var, pre-filled with the default.
  • parse(arguments): classify every token, resolve option names, consume and
    accumulate values, and return the positional arguments left over.
  • values / called / result: what the last parse produced.
- ParseResult: the immutable snapshot of one parse call.

Parse loop
- Scanning: each token is classified under the configured Mode.
  • no candidate names → positional, appended to the remaining list.
  • candidate names → all resolved before any is applied, so a bundle with an
    unknown name is passed through (or rejected) whole; only the last name of
    a bundle may take a value.
  • a lone "--" switches to pass-through and is dropped.
- Pass-through: every further token is appended verbatim, options included.
- With require_order, the first positional argument also switches to pass-through.

Faults
- Unknown, ambiguous, missing, unconvertible and malformed input aborts the call.
  Whatever was accumulated before stays in place, result.fault holds the fault,
  and the fault is surfaced through trigger(): raised by default, printed with
  rich (and exit status 1) when shell=True.
- Unknown names may instead be passed through (unknown="pass") or passed through
  with a warning (unknown="warn").

Quick start
    from getoptions import GetOpt, Mode

    getopt = GetOpt(mode=Mode.BUNDLING)
    verbose = getopt.boolean("verbose", "v")
    level = getopt.integer("level", "l", default=1)
    remaining = getopt.parse(["-v", "--level=3", "file.txt"])
    # verbose.value is True, level.value == 3, remaining == ["file.txt"]
"""
import copy
import difflib
import shlex
from collections import deque
from collections.abc import Iterable
from types import MappingProxyType

from .accumulators import accumulate, reset
from .consumers import consume
from .debug import logger
from .faults import *
from .matching import Exact, Prefix, Ambiguous, Unknown, resolve
from .options import Arity, Definition, Kind
from .registry import Registry
from .tokens import Mode, classify
from .utils import *

_UNKNOWN_POLICIES = ("fail", "warn", "pass")


class ParseResult:
    """
    Snapshot of one parse call.

    Properties
    - remaining: positional tokens, in input order (tuple).
    - values: canonical option name → final value, for every declared option.
    - called: canonical names of the options present in the input.
    - fault: the ParseError that aborted the call, or None.
    """

    __slots__ = ("_remaining", "_values", "_called", "_fault")

    remaining = mirror("remaining")

    def __init__(self, remaining, values, called, fault=None):
        self._remaining = tuple(remaining)
        self._values = MappingProxyType(detach(dict(values)))
        self._called = frozenset(called)
        self._fault = fault

    @property
    def values(self):
        return self._values

    @property
    def called(self):
        return self._called

    @property
    def fault(self):
        return self._fault

    def __rich_repr__(self):
        yield "remaining", self._remaining
        yield "values", dict(self._values)
        yield "called", sorted(self._called)
        yield "fault", self._fault

    def __repr__(self):
        return "parse-result(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


class GetOpt:
    """
    Option parser bound to one registry.

    Configuration (constructor, keyword-only)
    - mode: Mode — dash convention for single-dash tokens (default NORMAL).
    - require_order: bool — stop option processing at the first positional.
    - unknown: "fail" | "warn" | "pass" — what to do with unknown option names.
    - shell / colorful / fancy: how faults are surfaced (see getoptions.faults).
    """

    require_order = mirror("require_order")
    unknown = mirror("unknown")
    shell = mirror("shell")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    def __init__(
            self,
            *,
            mode=Mode.NORMAL,
            require_order=False,
            unknown="fail",
            shell=False,
            colorful=False,
            fancy=False
    ):
        if not isinstance(unknown, str):
            raise TypeError("getopt 'unknown' must be a string")
        elif unknown not in _UNKNOWN_POLICIES:
            raise ValueError("getopt 'unknown' must be one of 'fail', 'warn', or 'pass'")

        self._registry = Registry()
        self._called = set()
        self._result = None
        self.mode = mode
        self._require_order = bool(require_order)
        self._unknown = unknown
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

    @property
    def mode(self):
        return self._mode

    @mode.setter
    def mode(self, mode):
        if not isinstance(mode, Mode):
            raise TypeError("getopt 'mode' must be a Mode")
        self._mode = mode

    # --- registration ---

    def _register(self, kind, arity, name, aliases, default, var):
        definition = self._registry.register(Definition(name, *aliases, kind=kind, arity=arity, default=default, var=var))
        reset(definition)
        logger.debug("register: {!r}", definition)
        return definition.var

    def boolean(self, name, /, *aliases, default=False, var=Unset):
        """Presence-only switch: stores True when given."""
        return self._register(Kind.BOOLEAN, Arity.NONE, name, aliases, default, var)

    def negatable(self, name, /, *aliases, default=False, var=Unset):
        """Switch that also answers to "no-<name>", which stores False."""
        return self._register(Kind.NEGATABLE_BOOLEAN, Arity.NONE, name, aliases, default, var)

    def string(self, name, /, *aliases, default="", var=Unset):
        """String option with a required value; the last occurrence wins."""
        return self._register(Kind.STRING, Arity.REQUIRED, name, aliases, default, var)

    def string_optional(self, name, /, *aliases, default, var=Unset):
        """String option whose value may be omitted, in which case the default is stored."""
        return self._register(Kind.STRING, Arity.OPTIONAL, name, aliases, default, var)

    def integer(self, name, /, *aliases, default=0, var=Unset):
        """Integer option with a required value; the last occurrence wins."""
        return self._register(Kind.INTEGER, Arity.REQUIRED, name, aliases, default, var)

    def integer_optional(self, name, /, *aliases, default, var=Unset):
        """Integer option whose value may be omitted, in which case the default is stored."""
        return self._register(Kind.INTEGER, Arity.OPTIONAL, name, aliases, default, var)

    def string_list(self, name, /, *aliases, default=(), var=Unset):
        """Repeatable option; every occurrence appends one value."""
        return self._register(Kind.STRING_LIST, Arity.REQUIRED, name, aliases, default, var)

    def string_map(self, name, /, *aliases, default=Unset, var=Unset):
        """Repeatable key=value option; later duplicate keys overwrite earlier ones."""
        return self._register(Kind.STRING_MAP, Arity.REQUIRED, name, aliases, coalesce(default, {}), var)

    def option(self, name, /):
        """Return the Definition registered under the canonical name."""
        try:
            return self._registry[name]
        except KeyError:
            raise KeyError(f"no option named {name!r}") from None

    def __contains__(self, name):
        return name in self._registry

    def __iter__(self):
        return iter(self._registry)

    def __len__(self):
        return len(self._registry)

    # --- results ---

    @property
    def values(self):
        """Live view of every option's current value, keyed by canonical name."""
        return MappingProxyType({definition.name: definition.var.value for definition in self._registry})

    @property
    def called(self):
        return frozenset(self._called)

    @property
    def result(self):
        """The ParseResult of the last parse call (None before the first one)."""
        return self._result

    # --- parsing ---

    def _surface(self, fault, **options):
        trigger(fault, shell=self._shell, colorful=self._colorful, fancy=self._fancy, **options)

    def _resolve(self, name):
        """
        Resolve one candidate name; Unknown is returned to the caller, Ambiguous is fatal.
        """
        match resolve(name, self._registry):
            case Exact(_, _, definition, negated) | Prefix(_, _, definition, negated):
                return definition, negated
            case Ambiguous(_, candidates):
                raise AmbiguousOptionError(
                    "ambiguous option %r" % name,
                    title="ambiguous option",
                    code=FaultCode.AMBIGUOUS_OPTION,
                    name=name,
                    candidates=candidates,
                    hint="did you mean one of %s? type more of the name" % ", ".join(map(repr, candidates)),
                )
            case Unknown():
                return None

    def _unknown_option(self, name, token, index, remaining):
        suggestions = difflib.get_close_matches(name, list(self._registry.spellings()), 5)
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "check the spelling of the option"

        if self._unknown == "fail":
            raise UnknownOptionError(
                "unknown option %r" % name,
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                name=name,
                suggestions=suggestions,
                hint=hint,
            )
        if self._unknown == "warn":
            self._surface(UnknownOptionWarning(
                "unknown option %r at %s position, passed through" % (name, ordinal(index)),
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION_PASSED,
                name=name,
                index=index,
                suggestions=suggestions,
                hint=hint,
            ))
        remaining.append(token)

    def _dispatch(self, token, names, value, tokens, remaining, index):
        # A token is applied whole or not at all: every name resolves first.
        matches = []
        for name in names:
            if (resolved := self._resolve(name)) is None:
                return self._unknown_option(name, token, index, remaining)
            matches.append(resolved)

        last = len(names) - 1
        for position, (name, (definition, negated)) in enumerate(zip(names, matches)):
            if position == last:
                found = consume(definition, value, tokens, self._mode)
            elif definition.arity is Arity.REQUIRED:
                raise BundledArgumentError(
                    "option %r takes a value and must come last in %r" % (definition.name, token),
                    title="bundled option needs a value",
                    code=FaultCode.BUNDLED_ARGUMENT,
                    name=definition.name,
                    literal=token,
                    hint="move %r to the end of the bundle or pass it on its own" % name,
                )
            else:
                found = definition.default if definition.arity is Arity.OPTIONAL else None

            accumulate(definition, found, negated=negated)
            self._called.add(definition.name)

    def _tokenize(self, arguments):
        if isinstance(arguments, str):
            return deque(shlex.split(arguments))
        if not isinstance(arguments, Iterable):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        tokens = deque(arguments)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens

    def parse(self, arguments, /):
        """
        Parse an argument vector and return the remaining positional arguments.

        Parameters
        - arguments: Iterable[str] of raw tokens, or a shell-like string split
          with shlex.split.

        Behavior
        - every destination is reset to its default and `called` is cleared first.
        - on success, result holds a ParseResult and the remaining list is returned.
        - on a fault, result holds the partial ParseResult (fault set) and the
          fault is surfaced with its position and the partial remaining tokens.
        """
        tokens = self._tokenize(arguments)
        for definition in self._registry:
            reset(definition)
        self._called.clear()
        self._result = None

        remaining = []
        total = len(tokens)
        passthrough = False
        index = 0
        try:
            while tokens:
                index = total - len(tokens) + 1
                token = tokens.popleft()
                if passthrough:
                    remaining.append(token)
                    continue
                if token == "--":
                    logger.debug("parse: terminator at {} position", ordinal(index))
                    passthrough = True
                    continue

                names, value = classify(token, self._mode)
                logger.debug("parse: {!r} -> names={!r} value={!r}", token, names, value)
                if not names:
                    remaining.append(token)
                    passthrough = self._require_order
                    continue
                self._dispatch(token, names, value, tokens, remaining, index)
        except ParseError as fault:
            fault = copy.replace(
                fault,
                message="%s at %s position" % (fault.message, ordinal(index)),
                index=index,
                remaining=tuple(remaining),
            )
            self._result = ParseResult(remaining, self.values, self._called, fault)
            logger.debug("parse: aborted with {!r}", fault.message)
            return self._surface(fault)

        self._result = ParseResult(remaining, self.values, self._called)
        return remaining

    def __rich_repr__(self):
        yield "mode", self._mode.value
        yield "require_order", self._require_order
        yield "unknown", self._unknown
        yield "options", [definition.name for definition in self._registry]

    def __repr__(self):
        return "getopt(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "GetOpt",
    "ParseResult",
)
