"""
Argkind reflection: structural queries over type annotations.

A field's declared type is described by its annotation (int, list[int],
dict[str, int], bool | None, Annotated[bool, Decoder(...)], NewType("Port", int), ...).
This module answers the structural questions the classifier needs and nothing else:

- strip(hint)       → the annotation without transparent wrappers (Annotated, NewType).
- optional(hint)    → X for Optional[X] / X | None, Unset otherwise (the “pointer” layer).
- kindof(hint)      → Kind (BOOLEAN, PRIMITIVE, POINTER, SEQUENCE, MAPPING, OTHER).
- element(hint)     → element annotation of a sequence.
- entries(hint)     → (key, value) annotations of a mapping.
- isdecodable(hint) → whether the annotation supplies its own text decoding.
- typename(hint)    → readable name for diagnostics.

Text decoding
- A class opts in by defining a callable __fromtext__ hook (usually a classmethod
  taking the token and returning an instance). Parameterised generics of such a
  class (Box[int]) inherit the hook from their origin.
- Any annotation opts in through Annotated metadata: Annotated[bool, Decoder(parse)].
- Exactly one Optional layer is looked through: Optional[X] is decodable when X is.
  Annotated and NewType layers are always transparent.

All functions are pure: no caches, no state, safe from any thread.
"""
import collections.abc
import types
import typing
from enum import Enum
from typing import Annotated, Any, NewType, Union, final, get_args, get_origin

from .utils import Unset


class Kind(Enum):
    """
    structural shape of an annotation.
    """
    BOOLEAN = "boolean"
    PRIMITIVE = "primitive"
    POINTER = "pointer"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OTHER = "other"

    def __str__(self):
        return self.value


@final
class Decoder:
    """
    Annotated metadata marker: the field decodes its token with the wrapped callable.

    Example
        Toggle = Annotated[bool, Decoder(lambda text: text == "on")]
    """
    __slots__ = ("_decode",)

    def __init__(self, decode, /):
        if not callable(decode):
            raise TypeError("Decoder() argument must be callable")
        self._decode = decode

    @property
    def decode(self):
        return self._decode

    def __call__(self, text, /):
        return self._decode(text)

    def __eq__(self, other):
        if not isinstance(other, Decoder):
            return NotImplemented
        return self._decode is other._decode

    def __hash__(self):
        return hash(self._decode)

    def __repr__(self):
        return f"Decoder({getattr(self._decode, '__qualname__', repr(self._decode))})"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'Decoder' is not an acceptable base type")


def strip(hint, /):
    """
    remove transparent wrappers: Annotated[X, ...] → X, NewType("N", X) → X (repeatedly).
    """
    while True:
        if get_origin(hint) is Annotated:
            hint = hint.__origin__
        elif isinstance(hint, NewType):
            hint = hint.__supertype__
        else:
            return hint


def optional(hint, /):
    """
    return X when the annotation is Optional[X] (X | None), Unset otherwise.

    unions with more than one non-None member are not optionals.
    """
    hint = strip(hint)
    if get_origin(hint) not in (Union, types.UnionType):
        return Unset
    members = [member for member in get_args(hint) if member is not types.NoneType]
    if len(members) != 1:
        return Unset
    member, = members
    return member


def _decoder(hint):
    while True:
        if get_origin(hint) is Annotated:
            for metadata in hint.__metadata__:
                if isinstance(metadata, Decoder):
                    return metadata
            hint = hint.__origin__
        elif isinstance(hint, NewType):
            hint = hint.__supertype__
        else:
            break
    origin = hint if isinstance(hint, type) else get_origin(hint)
    if isinstance(origin, type) and callable(getattr(origin, "__fromtext__", None)):
        return origin.__fromtext__
    return Unset


def isdecodable(hint, /):
    """
    true when the annotation, or the X of an Optional[X], supplies its own text decoding.
    """
    if _decoder(hint) is not Unset:
        return True
    return (inner := optional(hint)) is not Unset and _decoder(inner) is not Unset


def _origin(hint):
    origin = get_origin(hint)
    return hint if origin is None else origin


def kindof(hint, /):
    """
    classify the structural shape of an annotation.

    - BOOLEAN   bool
    - PRIMITIVE str, bytes, int, float, complex (and subclasses, bool excluded)
    - POINTER   Optional[X]
    - SEQUENCE  list, set, frozenset, deque, sequence/set ABCs, tuple[X, ...]
    - MAPPING   dict and mapping ABCs
    - OTHER     anything else (fixed-shape tuples, callables, queues, plain classes, ...)
    """
    hint = strip(hint)
    if hint is bool:
        return Kind.BOOLEAN
    if optional(hint) is not Unset:
        return Kind.POINTER
    if not isinstance(origin := _origin(hint), type):
        return Kind.OTHER
    if issubclass(origin, (str, bytes, int, float, complex)):
        return Kind.PRIMITIVE
    if issubclass(origin, collections.abc.Mapping):
        return Kind.MAPPING
    if issubclass(origin, tuple):
        arguments = get_args(hint)
        if not arguments or (len(arguments) == 2 and arguments[1] is Ellipsis):
            return Kind.SEQUENCE
        return Kind.OTHER
    if issubclass(origin, (collections.abc.Sequence, collections.abc.Set)):
        return Kind.SEQUENCE
    return Kind.OTHER


def element(hint, /):
    """
    element annotation of a SEQUENCE annotation (Any when unparameterised).
    """
    if kindof(hint) is not Kind.SEQUENCE:
        raise TypeError(f"element() argument must be a sequence annotation, not {typename(hint)}")
    arguments = get_args(strip(hint))
    return arguments[0] if arguments else Any


def entries(hint, /):
    """
    (key, value) annotations of a MAPPING annotation ((Any, Any) when unparameterised).
    """
    if kindof(hint) is not Kind.MAPPING:
        raise TypeError(f"entries() argument must be a mapping annotation, not {typename(hint)}")
    arguments = get_args(strip(hint))
    if len(arguments) != 2:
        return Any, Any
    return arguments


def typename(hint, /):
    """
    readable name of an annotation for diagnostics.

    classes print as their qualified name (module-prefixed outside builtins);
    generic aliases and special forms print as written, without the "typing." prefix.
    """
    if hint is None or hint is types.NoneType:
        return "None"
    if hint is Ellipsis:
        return "..."
    if isinstance(hint, NewType):
        return hint.__name__
    if isinstance(hint, type) and get_origin(hint) is None:
        if hint.__module__ == "builtins":
            return hint.__qualname__
        return f"{hint.__module__}.{hint.__qualname__}"
    return repr(hint).replace(typing.__name__ + ".", "")


__all__ = (
    "Kind",
    "Decoder",
    "strip",
    "optional",
    "isdecodable",
    "kindof",
    "element",
    "entries",
    "typename",
)
