"""
Argkind fields: classify every annotated field of an argument container.

An argument container is any class (dataclass or plain annotated class) whose
annotated attributes become command-line arguments. collect() walks it once,
before parsing, and turns each visible field into a FieldSpec:

- name, annotation: as declared (Annotated metadata preserved);
- cardinality: from classify(); drives token consumption (see FieldSpec.nargs);
- default: the pre-populated value when it is not the zero value, Unset otherwise;
- declared: whether any default was declared at all;
- required: no default declared and exactly one token expected.

Unsupported annotations are not reported one by one: collect() raises a single
UnsupportedFieldsError grouping one UnsupportedTypeError per offending field.

After parsing, missing()/enforce() report required fields still holding their
zero value.

Quick example:
    >>> @dataclass
    ... class Args:
    ...     host: str
    ...     port: int = 8080
    ...     verbose: bool = False
    ...     tags: list[str] = field(default_factory=list)
    >>> [str(spec.cardinality) for spec in collect(Args)]
    ['one', 'one', 'zero', 'multiple']
"""
import dataclasses
import typing

from .classifier import Cardinality, classify
from .faults import MissingFieldError, MissingFieldsError, UnsupportedFieldsError
from .predicates import ispublic, iszero
from .utils import Unset, mirror


class FieldSpec:
    """
    read-only description of one collected field.
    """
    __slots__ = ("_name", "_annotation", "_cardinality", "_default", "_declared")
    __introspectable__ = ("name", "annotation", "cardinality", "default", "declared")

    name = mirror("name")
    cardinality = mirror("cardinality")
    default = mirror("default")
    declared = mirror("declared")

    @property
    def annotation(self):
        # Annotations are returned as declared, never copied.
        return self._annotation

    def __init__(self, name, annotation, cardinality, /, default=Unset, *, declared=False):
        if not isinstance(name, str):
            raise TypeError("FieldSpec 'name' must be a string")
        if not isinstance(cardinality, Cardinality) or cardinality is Cardinality.UNSUPPORTED:
            raise TypeError("FieldSpec 'cardinality' must be a supported Cardinality")
        self._name = name
        self._annotation = annotation
        self._cardinality = cardinality
        self._default = default
        self._declared = bool(declared or default is not Unset)

    @property
    def required(self):
        return not self._declared and self._cardinality is Cardinality.ONE

    @property
    def nargs(self):
        return self._cardinality.nargs

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"field-spec({', '.join('%s=%r' % item for item in self.__rich_repr__())})"

    def __eq__(self, other):
        if not isinstance(other, FieldSpec):
            return NotImplemented
        return all(getattr(self, slot) == getattr(other, slot) for slot in type(self).__slots__)

    __hash__ = None


def _declared(cls, name, fields):
    """
    default declared on the class (dataclass default, default factory or class
    attribute), Unset when there is none.
    """
    if (field := fields.get(name)) is not None:
        if field.default is not dataclasses.MISSING:
            return field.default
        if field.default_factory is not dataclasses.MISSING:
            return field.default_factory()
        return Unset
    return getattr(cls, name, Unset)


def collect(target, /, *, visible=ispublic):
    """
    classify every visible annotated field of a class or instance.

    parameters
    - target: class or instance of the argument container.
    - visible: name predicate selecting the fields to collect (ispublic by
      default; pass isexported for uppercase-exported fields only).

    returns
    - tuple[FieldSpec, ...] in declaration order (base classes first).

    raises
    - UnsupportedFieldsError grouping one UnsupportedTypeError per field whose
      annotation can not be token-parsed.
    """
    if not callable(visible):
        raise TypeError("collect() 'visible' must be callable")
    cls, instance = (target, Unset) if isinstance(target, type) else (type(target), target)
    fields = {field.name: field for field in dataclasses.fields(cls)} if dataclasses.is_dataclass(cls) else {}

    specs = []
    faults = []
    for name, annotation in typing.get_type_hints(cls, include_extras=True).items():
        if not visible(name) or annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar:
            continue
        if isinstance(annotation, dataclasses.InitVar):
            continue
        result, fault = classify(annotation)
        if fault is not None:
            faults.append(fault.__replace__(field=name))
            continue
        declared = _declared(cls, name, fields)
        value = declared if instance is Unset else getattr(instance, name, declared)
        default = Unset if value is Unset or iszero(value) else value
        specs.append(FieldSpec(name, annotation, result, default, declared=declared is not Unset))

    if faults:
        raise UnsupportedFieldsError(faults)
    return tuple(specs)


def missing(instance, specs=None, /):
    """
    names of required fields whose value on the instance is still zero.
    """
    if isinstance(instance, type):
        raise TypeError("missing() argument must be an instance, not a class")
    if specs is None:
        specs = collect(type(instance))
    return [
        spec.name for spec in specs
        if spec.required and iszero(getattr(instance, spec.name, None))
    ]


def enforce(instance, specs=None, /):
    """
    raise MissingFieldsError when any required field is still zero.
    """
    if names := missing(instance, specs):
        raise MissingFieldsError([
            MissingFieldError("required field was never set", field=name) for name in names
        ])
    return instance


__all__ = (
    "FieldSpec",
    "collect",
    "missing",
    "enforce",
)
