"""
Option registry: every declared option, keyed by canonical name and alias.

Every spelling an option answers to (canonical name, aliases, and the implicit
"no-" form of a negatable boolean) is unique across the whole registry. A clash
is a configuration error raised at registration time, never at parse time.

The registry is mutated only while options are being declared; parsing treats it
as read-only, so one registry may back several sequential parse calls.
"""
from collections import namedtuple

from .faults import DuplicateOptionError
from .options import Definition

Entry = namedtuple("Entry", ("definition", "negated"))
Entry.__doc__ = "a registered spelling: the definition it belongs to and whether it is the 'no-' form"


class Registry:
    def __init__(self):
        self._definitions = {}
        self._entries = {}

    def register(self, definition, /):
        """
        Add a definition; raise DuplicateOptionError if any of its spellings is taken.
        """
        if not isinstance(definition, Definition):
            raise TypeError("register() argument must be a Definition")

        spellings = [*((name, False) for name in definition.names), *((name, True) for name in definition.negations)]
        seen = set()
        for name, _ in spellings:
            if name in self._entries or name in seen:
                raise DuplicateOptionError(name)
            seen.add(name)
        if definition.var.bound:
            raise ValueError(f"option {definition.name!r} destination is already bound to {definition.var._owner.name!r}")

        definition.var._owner = definition
        self._definitions[definition.name] = definition
        for name, negated in spellings:
            self._entries[name] = Entry(definition, negated)
        return definition

    def lookup(self, name, /):
        """
        Return the Entry registered under exactly this spelling, or None.
        """
        return self._entries.get(name)

    def spellings(self):
        """
        Iterate over every registered spelling (names, aliases, negations).
        """
        return iter(self._entries)

    def __getitem__(self, name):
        return self._definitions[name]

    def __contains__(self, name):
        return name in self._definitions

    def __iter__(self):
        return iter(self._definitions.values())

    def __len__(self):
        return len(self._definitions)

    def __repr__(self):
        return f"Registry({list(self._definitions)!r})"


__all__ = (
    "Entry",
    "Registry",
)
