"""
Accumulation: merge a consumed value into an option's destination.

This module is the only writer of Var slots.

Per kind
- BOOLEAN:           any match stores True.
- NEGATABLE_BOOLEAN: the plain name stores True, the "no-" name stores False.
- STRING / INTEGER:  overwrite; the last occurrence wins.
- STRING_LIST:       append, preserving input order.
- STRING_MAP:        split at the first "=" and insert/overwrite that key;
                     a value without "=" raises MalformedMapEntryError.
"""
from .debug import logger
from .faults import FaultCode, MalformedMapEntryError
from .options import Kind


def reset(definition, /):
    """
    Store a fresh copy of the option's default in its destination.
    """
    definition.var._value = definition.initial()


def accumulate(definition, value, /, *, negated=False):
    var = definition.var
    match definition.kind:
        case Kind.BOOLEAN:
            var._value = True
        case Kind.NEGATABLE_BOOLEAN:
            var._value = not negated
        case Kind.STRING | Kind.INTEGER:
            var._value = value
        case Kind.STRING_LIST:
            var._value.append(value)
        case Kind.STRING_MAP:
            key, separator, item = value.partition("=")
            if not separator:
                raise MalformedMapEntryError(
                    "malformed map entry %r for option %r" % (value, definition.name),
                    title="malformed map entry",
                    code=FaultCode.MALFORMED_MAP_ENTRY,
                    name=definition.name,
                    literal=value,
                    hint="use key=value (for example: --%s=key=value)" % definition.name,
                )
            var._value[key] = item
    logger.debug("accumulate: {!r} is now {!r}", definition.name, var._value)


__all__ = (
    "reset",
    "accumulate",
)
