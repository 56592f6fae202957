"""
Argkind predicates over field names and field values.

- isexported(name): the first code point is an uppercase letter.
- ispublic(name): Python visibility convention (no leading underscore).
- iszero(value): the value still holds its type's zero (default) value.

Malformed names are not exported, non-text names are a TypeError, and values
whose zero-ness can not be established are never zero.
"""
import dataclasses
from collections.abc import Mapping, Sequence, Set
from enum import Enum

from .scalar import SCALARS


def isexported(name, /):
    """
    true when the first code point of the name is an uppercase letter.

    bytes are decoded as UTF-8; an empty name or an undecodable first
    sequence yields False.
    """
    if isinstance(name, bytes | bytearray):
        name = bytes(name[:4]).decode("utf-8", "replace")
    elif not isinstance(name, str):
        raise TypeError("isexported() argument must be a string")
    if not name:
        return False
    first = name[0]
    return first.isalpha() and first.isupper()


def ispublic(name, /):
    """
    true when the name does not start with an underscore.
    """
    if not isinstance(name, str):
        raise TypeError("ispublic() argument must be a string")
    return bool(name) and not name.startswith("_")


def _defaulted(instance):
    if not instance.__dataclass_params__.frozen:
        return False
    fields = dataclasses.fields(instance)
    if any(field.default is dataclasses.MISSING for field in fields):
        return False
    return all(getattr(instance, field.name) == field.default for field in fields)


def iszero(value, /):
    """
    true when the value equals its type's zero value.

    - None is the unset handle and always zero.
    - containers (sequences, mappings, sets) are handles: once allocated they
      are not zero, even when empty. str and bytes are values.
    - unhashable values are not comparable and never zero.
    - scalars are compared with the no-argument default of their scalar base;
      Enum members have none.
    - frozen dataclasses are zero when every field still equals its declared
      plain default.
    - everything else is never zero. No user constructor is ever called, and a
      failing comparison reports False.
    """
    if value is None:
        return True
    if isinstance(value, Sequence | Mapping | Set) and not isinstance(value, str | bytes):
        return False
    if isinstance(value, Enum) or type(value).__hash__ is None:
        return False
    try:
        if dataclasses.is_dataclass(value):
            return _defaulted(value)
        for base in type(value).__mro__:
            if base in SCALARS:
                return bool(value == base())
    except Exception:
        return False
    return False


__all__ = (
    "isexported",
    "ispublic",
    "iszero",
)
