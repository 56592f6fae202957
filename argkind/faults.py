"""
Argkind faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue raised while
  classifying field types or enforcing required fields.
- FieldFault: base type that carries message + options and knows how to render
  itself in a friendly, lowercased, and actionable way.
- FieldFaults: exception group aggregating one fault per offending field.
- trigger(): central entry point to surface any fault (respecting shell/deferred/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

When faults happen
- Type faults reflect a programming error in the target's field annotations, not a
  runtime input error. They are raised while building argument specs, before any
  token is parsed, and are never retried or recovered internally.
- Missing-field faults are raised after parsing, when a required field still holds
  its zero value.

Integration
- The classifier returns (or raises) UnsupportedTypeError.
- Field collection groups them into UnsupportedFieldsError.
- CLI code calls trigger(fault, shell=True, ...) to render via rich instead of raising.
"""
import os
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - type classification (211xx)
      • UNSUPPORTED_TYPE, UNSUPPORTED_ELEMENT, UNSUPPORTED_KEY, UNSUPPORTED_VALUE
    - field collection (212xx)
      • UNSUPPORTED_FIELDS, MISSING_FIELD, MISSING_FIELDS

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- type classification errors (211xx) ---
    UNSUPPORTED_TYPE    = 21101
    UNSUPPORTED_ELEMENT = 21102
    UNSUPPORTED_KEY     = 21103
    UNSUPPORTED_VALUE   = 21104

    # --- field collection errors (212xx) ---
    UNSUPPORTED_FIELDS  = 21201
    MISSING_FIELD       = 21211
    MISSING_FIELDS      = 21212

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog(options):
    return getattr(__import__("__main__"), "__prog__", options.get("prog") or os.path.basename(sys.argv[0]))


def _styler(options, styles):
    main = __import__("__main__")
    styles = defaultdict(str, styles | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if options.get("colorful", True) else ""

    return styler


def _text(options, fragment, style=""):
    if not fragment:
        return Text("")
    if not options.get("colorful", True):
        return Text(str(fragment))
    if isinstance(fragment, Text):
        return fragment
    return Text(str(fragment), style)


class FieldFault(Exception):
    """
    base fault raised about a single field or field type.

    options (all optional, merged through __replace__/trigger)
    - code: FaultCode
    - title: short headline (rendered title-cased)
    - hint: one actionable sentence
    - annotation: the offending type annotation
    - position: "element" | "key" | "value" for container faults
    - field: field name, when known
    - shell/fancy/colorful/deferred/ratio: rendering behaviour (see trigger()).
    """
    __faultcode__ = FaultCode.UNSUPPORTED_TYPE
    __title__ = "field fault"
    __hint__ = ""

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType({
            "code": type(self).__faultcode__,
            "title": type(self).__title__,
            "hint": type(self).__hint__,
        } | options)

    def __str__(self):
        if (field := self.options.get("field")) is not None:
            return f"field {field!r}: {coalesce(self.message, '')}"
        return coalesce(self.message, "")

    def __rich__(self):
        options = self.options
        styler = _styler(options, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

        header = Text.assemble(
            "[ ",
            _text(options, _prog(options), styler("prog-name")),
            " — ",
            _text(options, options["code"].normalize(), styler("code")),
            " | ",
            _text(options, options["title"].title(), styler("error-title")),
            " ]"
        )
        message = _text(options, str(self), styler("error-message"))
        hint = Text.assemble(_text(options, " → ", styler("hint-arrow")), _text(options, options["hint"], styler("hint")))

        if options.get("fancy", False):
            width = None
            if "ratio" in options:
                width = int((console.width - 4) * options["ratio"])
            return Panel(Group(message, hint), title=header, title_align="left", width=width)

        return Group(header, message, hint)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnsupportedTypeError(FieldFault):
    __faultcode__ = FaultCode.UNSUPPORTED_TYPE
    __title__ = "unsupported type"
    __hint__ = "annotate the field with a scalar, a container of scalars, or a text-decodable type"


class MissingFieldError(FieldFault):
    __faultcode__ = FaultCode.MISSING_FIELD
    __title__ = "missing field"
    __hint__ = "provide a value for the field or give it a non-zero default"


class FieldFaults(ExceptionGroup):
    """
    aggregated report: one fault per offending field.
    """
    __faultcode__ = FaultCode.UNSUPPORTED_FIELDS
    __title__ = "field faults"

    def __new__(cls, exceptions, /, **options):
        return super().__new__(cls, cls.__title__, tuple(exceptions))

    def __init__(self, exceptions, /, **options):
        super().__init__(type(self).__title__, tuple(exceptions))
        self.options = MappingProxyType({"code": type(self).__faultcode__} | options)

    def derive(self, exceptions):
        return type(self)(exceptions, **self.options)

    def __rich__(self):
        options = self.options
        styler = _styler(options, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky group title
        })

        header = Text.assemble(
            "[ ",
            _text(options, _prog(options), styler("prog-name")),
            " — ",
            _text(options, options["code"].normalize(), styler("code")),
            " | ",
            _text(options, self.message.title(), styler("title")),
            " ]"
        )

        shared = {key: value for key, value in options.items() if key != "code"}
        renders = [exception.__replace__(**(shared | {"ratio": 2/3})) for exception in self.exceptions]

        if options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


class UnsupportedFieldsError(FieldFaults):
    __faultcode__ = FaultCode.UNSUPPORTED_FIELDS
    __title__ = "unsupported fields"


class MissingFieldsError(FieldFaults):
    __faultcode__ = FaultCode.MISSING_FIELDS
    __title__ = "missing fields"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are raised.

    typical options
    - shell, fancy, colorful, deferred, prog, and any other context the reporter
      may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "FieldFault",
    "UnsupportedTypeError",
    "MissingFieldError",
    "FieldFaults",
    "UnsupportedFieldsError",
    "MissingFieldsError",
    "trigger",
    "getdoc",
)
