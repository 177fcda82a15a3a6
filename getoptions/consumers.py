"""
Value consumption: decide where a matched option's value comes from.

consume(definition, value, tokens, mode) returns the converted value:
- no arity (booleans): nothing is consumed; an inline value is ignored.
- required value: the inline value, or else the next token no matter what it
  looks like ("--string --hello" stores "--hello"); MissingArgumentError when
  the stream is exhausted.
- optional value: the inline value, or else the next token unless it reads as
  an option itself, or else the option's default.

Integer options are coerced here: an optional sign followed by ASCII digits.
Anything else raises ConversionError naming the offending literal.
"""
import re

from .debug import logger
from .faults import FaultCode, MissingArgumentError, ConversionError
from .options import Arity, Kind
from .tokens import Mode, is_option


def convert(definition, literal, /):
    """
    Coerce a raw string to the option's value type.
    """
    if definition.kind is not Kind.INTEGER:
        return literal
    if not re.fullmatch(r"[+-]?[0-9]+", literal):
        raise ConversionError(
            "can't convert string to int: %r" % literal,
            title="conversion failure",
            code=FaultCode.CONVERSION_FAILURE,
            name=definition.name,
            literal=literal,
            hint="pass a whole number (for example: --%s=42)" % definition.name,
        )
    return int(literal)


def consume(definition, value, tokens, mode=Mode.NORMAL, /):
    match definition.arity:
        case Arity.NONE:
            if value is not None:
                logger.debug("consume: ignoring inline value {!r} for {!r}", value, definition.name)
            return None
        case Arity.REQUIRED:
            if value is None:
                if not tokens:
                    raise MissingArgumentError(
                        "missing argument for option %r" % definition.name,
                        title="missing argument",
                        code=FaultCode.MISSING_ARGUMENT,
                        name=definition.name,
                        hint="pass a value after a space or an '=' (for example: --%s=<value>)" % definition.name,
                    )
                value = tokens.popleft()
        case Arity.OPTIONAL:
            if value is None:
                if not tokens or is_option(tokens[0], mode):
                    logger.debug("consume: {!r} falls back to its default", definition.name)
                    return definition.default
                value = tokens.popleft()
    return convert(definition, value)


__all__ = (
    "convert",
    "consume",
)
