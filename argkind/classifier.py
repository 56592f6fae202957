"""
Argkind classifier: how many tokens does a field consume?

Cardinality
- ZERO        presence flag (bool, Optional[bool]); no token is consumed.
- ONE         ordinary value parsed from a single token.
- MULTIPLE    sequence or mapping; zero or more tokens are consumed.
- UNSUPPORTED the annotation can not be token-parsed at all.

classify(hint) decides, in order:
1. scalar-parsable annotations are ZERO when they are presence flags, ONE otherwise;
2. an Optional[X] layer is unwrapped (Optional scalars were already handled in 1);
3. sequences are MULTIPLE when their element is scalar-parsable;
4. mappings are MULTIPLE when both key and value are scalar-parsable;
5. everything else is UNSUPPORTED.

The result is a Classification(cardinality, fault) pair whose fault is an
UnsupportedTypeError exactly when the cardinality is UNSUPPORTED. Use
cardinality(hint) to get the bare Cardinality and have the fault raised instead.

Quick example:
    >>> classify(list[int])
    Classification(cardinality=<Cardinality.MULTIPLE: 2>, fault=None)
    >>> str(cardinality(bool | None))
    'zero'
"""
from enum import IntEnum
from typing import NamedTuple

from . import scalar
from .faults import FaultCode, UnsupportedTypeError
from .reflect import Kind, element, entries, isdecodable, kindof, optional, strip, typename
from .utils import Unset


class Cardinality(IntEnum):
    ZERO = 0
    ONE = 1
    MULTIPLE = 2
    UNSUPPORTED = 3

    def __str__(self):
        return self.name.lower()

    @property
    def nargs(self):
        """
        arity in argument-spec terms: 0 (flag), None (single), "*" (variadic),
        Unset when the field can not be parsed.
        """
        return {
            Cardinality.ZERO: 0,
            Cardinality.ONE: None,
            Cardinality.MULTIPLE: "*",
        }.get(self, Unset)


class Classification(NamedTuple("Classification", [("cardinality", Cardinality), ("fault", UnsupportedTypeError | None)])):
    """
    (cardinality, fault) pair; fault is an UnsupportedTypeError exactly when
    the cardinality is UNSUPPORTED.
    """
    __slots__ = ()

    def __new__(cls, cardinality, fault):
        if not isinstance(cardinality, Cardinality):
            raise TypeError("Classification 'cardinality' must be a Cardinality")
        if fault is not None and not isinstance(fault, UnsupportedTypeError):
            raise TypeError("Classification 'fault' must be an UnsupportedTypeError or None")
        if (cardinality is Cardinality.UNSUPPORTED) != (fault is not None):
            raise ValueError("Classification 'fault' must be set exactly when the cardinality is UNSUPPORTED")
        return super().__new__(cls, cardinality, fault)


def isflag(hint, /):
    """
    true when the field is a presence flag.

    a text-decodable annotation always wants its token, even when it is
    structurally a bool; otherwise bool and Optional[bool] are flags.
    """
    if isdecodable(hint):
        return False
    if kindof(hint) is Kind.BOOLEAN:
        return True
    return (inner := optional(hint)) is not Unset and kindof(inner) is Kind.BOOLEAN


def _unsupported(message, /, **options):
    return Classification(Cardinality.UNSUPPORTED, UnsupportedTypeError(message, **options))


def classify(hint, /):
    """
    classify an annotation into a Classification(cardinality, fault).

    never raises for unsupported annotations; the fault is returned instead.
    """
    if scalar.parsable(hint):
        return Classification(Cardinality.ZERO if isflag(hint) else Cardinality.ONE, None)

    if (inner := optional(hint)) is not Unset:
        hint = inner

    match kindof(hint):
        case Kind.SEQUENCE:
            if not scalar.parsable(item := element(hint)):
                return _unsupported(
                    f"cannot parse into {typename(strip(hint))} because {typename(item)} not supported",
                    code=FaultCode.UNSUPPORTED_ELEMENT,
                    annotation=hint,
                    position="element",
                )
            return Classification(Cardinality.MULTIPLE, None)
        case Kind.MAPPING:
            key, value = entries(hint)
            if not scalar.parsable(key):
                return _unsupported(
                    f"cannot parse into {typename(strip(hint))} because key type {typename(key)} not supported",
                    code=FaultCode.UNSUPPORTED_KEY,
                    annotation=hint,
                    position="key",
                )
            if not scalar.parsable(value):
                return _unsupported(
                    f"cannot parse into {typename(strip(hint))} because value type {typename(value)} not supported",
                    code=FaultCode.UNSUPPORTED_VALUE,
                    annotation=hint,
                    position="value",
                )
            return Classification(Cardinality.MULTIPLE, None)
        case _:
            return _unsupported(f"cannot parse into {typename(hint)}", annotation=hint)


def cardinality(hint, /):
    """
    raising form of classify(): return the Cardinality or raise its UnsupportedTypeError.
    """
    result, fault = classify(hint)
    if fault is not None:
        raise fault
    return result


__all__ = (
    "Cardinality",
    "Classification",
    "classify",
    "cardinality",
    "isflag",
)
