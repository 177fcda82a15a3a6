"""
Name resolution: map a candidate name to a registered option.

resolve(name, registry) returns one of
- Exact(name, spelling, definition, negated): the name is a registered spelling.
- Prefix(name, spelling, definition, negated): the name is a proper prefix of
  exactly one registered spelling.
- Ambiguous(name, candidates): the name prefixes two or more spellings.
- Unknown(name): nothing matches.

An exact match always wins, even when the name also prefixes other spellings.
Matching is case-sensitive, and the "no-" spellings of negatable booleans take
part like any other name. The empty name never prefix-matches.
"""
from collections import namedtuple

from .debug import logger


class Exact(namedtuple("Exact", ("name", "spelling", "definition", "negated"))):
    __slots__ = ()


class Prefix(namedtuple("Prefix", ("name", "spelling", "definition", "negated"))):
    __slots__ = ()


class Ambiguous(namedtuple("Ambiguous", ("name", "candidates"))):
    __slots__ = ()


class Unknown(namedtuple("Unknown", ("name",))):
    __slots__ = ()


def resolve(name, registry, /):
    if (entry := registry.lookup(name)) is not None:
        logger.debug("resolve: {!r} matched exactly", name)
        return Exact(name, name, entry.definition, entry.negated)

    if name:
        candidates = sorted(spelling for spelling in registry.spellings() if spelling.startswith(name))
        if len(candidates) == 1:
            spelling, = candidates
            entry = registry.lookup(spelling)
            logger.debug("resolve: {!r} matched {!r} by prefix", name, spelling)
            return Prefix(name, spelling, entry.definition, entry.negated)
        if candidates:
            logger.debug("resolve: {!r} is ambiguous between {}", name, candidates)
            return Ambiguous(name, tuple(candidates))

    logger.debug("resolve: {!r} is unknown", name)
    return Unknown(name)


__all__ = (
    "Exact",
    "Prefix",
    "Ambiguous",
    "Unknown",
    "resolve",
)
