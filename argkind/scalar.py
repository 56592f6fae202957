"""
Argkind scalar capability: can a single token become a value of this annotation?

This is the question the classifier asks of the scalar-conversion layer. The
conversion itself lives with the parser; only the capability is answered here.

Parsable annotations (one Optional layer is looked through)
- anything isdecodable() accepts (a __fromtext__ hook or an Annotated Decoder);
- bool, str, bytes, int, float, complex, Decimal, Fraction;
- pathlib.PurePath and subclasses, ipaddress addresses/networks/interfaces, uuid.UUID;
- datetime.date, datetime.time, datetime.datetime (ISO 8601);
- Enum subclasses (member names);
- subclasses of any of the above;
- Literal[...] whose values are str, bytes, int, bool or Enum members.
"""
import datetime
import decimal
import enum
import fractions
import ipaddress
import pathlib
import uuid
from typing import Literal, get_args, get_origin

from .reflect import isdecodable, optional, strip
from .utils import Unset

SCALARS = (
    bool,
    str,
    bytes,
    int,
    float,
    complex,
    decimal.Decimal,
    fractions.Fraction,
    pathlib.PurePath,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    ipaddress.IPv4Interface,
    ipaddress.IPv6Interface,
    uuid.UUID,
    datetime.date,
    datetime.time,
    enum.Enum,
)
# datetime.datetime is a subclass of datetime.date


def _literal(hint):
    values = get_args(hint)
    return bool(values) and all(isinstance(value, (str, bytes, int, enum.Enum)) for value in values)


def parsable(hint, /):
    """
    true when one token can be converted into a value of the annotation.

    looks through exactly one Optional layer; containers are never parsable
    here (the classifier handles them element by element).
    """
    if isdecodable(hint):
        return True
    if (inner := optional(hint)) is not Unset:
        hint = inner
    hint = strip(hint)
    if get_origin(hint) is Literal:
        return _literal(hint)
    return isinstance(hint, type) and get_origin(hint) is None and issubclass(hint, SCALARS)


__all__ = (
    "SCALARS",
    "parsable",
)
