"""
Record Generator — namespaced record families built on dataclasses.

A record family is declared with a namespace, a name and a field list:

    workgroup = define_record("wg", "workgroup", "uid", "name", ("dirty", False))

This generates:
    - a dataclass `WgWorkgroup` (keyword-only constructor)
    - `make_wg_workgroup(**fields)`   constructor
    - `copy_wg_workgroup(record, **changes)`   shallow copy
    - `wg_workgroup_<field>(record)`  one accessor per field

all reachable from the returned RecordFamily, and optionally installed
into a module namespace with `family.install(globals())`. Two families
with the same name in different namespaces never share generated names.

Records print through `wgutil.sexp` as a tagged alist:

    (wg-workgroup (uid . "AB12") (name . "main") (dirty . nil))

and `record_from_form` / `restore_records` rebuild them after reading.
Fields holding None are left out of the form; nil reads back as False
for bool-defaulted fields and as an empty list everywhere else.

ARCHITECTURAL RULE:
    Records are plain data. Each instance owns its field values; list
    and dict defaults are copied per instance. Copies are shallow.
"""

from __future__ import annotations

import copy
import dataclasses
import keyword
import warnings
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from wgutil.errors import RecordError
from wgutil.forms import Pair, Symbol
from wgutil.sequences import has_duplicates


@dataclass(frozen=True)
class RecordField:
    """
    Declaration of one record field.

    Properties:
        name: Field name (must be a Python identifier)
        type: Annotation for the generated dataclass (documentation only)
        default: Value used when the constructor omits the field;
            None when not given. Lists, dicts and sets are copied for
            each new record.
    """

    name: str
    type: Any = Any
    default: Any = None


FieldSpec = Union[str, Tuple[str, Any], RecordField]


def _coerce_field(spec: FieldSpec) -> RecordField:
    if isinstance(spec, RecordField):
        return spec
    if isinstance(spec, str):
        return RecordField(name=spec)
    if isinstance(spec, tuple) and len(spec) == 2:
        return RecordField(name=spec[0], default=spec[1])
    raise RecordError(f"Invalid field declaration: {spec!r}")


RESERVED_FIELD_NAMES = frozenset({"to_form", "record_family"})


def _python_name(text: str) -> str:
    return text.replace("-", "_")


def _class_name(namespace: str, name: str) -> str:
    parts = _python_name(f"{namespace}_{name}").split("_")
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


def _dataclass_field(spec: RecordField) -> Tuple[str, Any, Any]:
    default = spec.default
    if isinstance(default, (list, dict, set)):
        return spec.name, spec.type, field(default_factory=lambda: copy.copy(default))
    return spec.name, spec.type, field(default=default)


class RecordFamily:
    """
    The generated operations of one namespaced record type.

    Properties:
        namespace: Namespace prefix (e.g. "wg")
        name: Record name within the namespace (e.g. "workgroup")
        fields: Declared fields in order
        cls: The generated dataclass
        tag: Symbol heading the record's printed form ("wg-workgroup")
    """

    def __init__(self, namespace: str, name: str, fields: Sequence[RecordField]):
        self.namespace = namespace
        self.name = name
        self.fields = list(fields)
        self.tag = Symbol(f"{namespace}-{name}")
        self.prefix = _python_name(f"{namespace}_{name}")
        self.defaults = {f.name: f.default for f in self.fields}

        family = self

        def to_form(record: Any) -> List[Any]:
            return family.to_form(record)

        self.cls = dataclasses.make_dataclass(
            _class_name(namespace, name),
            [_dataclass_field(f) for f in self.fields],
            namespace={"to_form": to_form, "record_family": self},
            kw_only=True,
        )
        self.accessors: Dict[str, Callable[[Any], Any]] = {
            f.name: self._make_accessor(f.name) for f in self.fields
        }

    def _make_accessor(self, field_name: str) -> Callable[[Any], Any]:
        def accessor(record: Any) -> Any:
            return getattr(record, field_name)

        accessor.__name__ = f"{self.prefix}_{field_name}"
        return accessor

    @property
    def constructor_name(self) -> str:
        return f"make_{self.prefix}"

    @property
    def copier_name(self) -> str:
        return f"copy_{self.prefix}"

    def make(self, **values: Any) -> Any:
        """Construct a record; unknown field names raise RecordError."""
        unknown = set(values) - set(self.defaults)
        if unknown:
            raise RecordError(f"Unknown fields for {self.tag}: {sorted(unknown)}")
        return self.cls(**values)

    def copy(self, record: Any, **changes: Any) -> Any:
        """Shallow copy of `record`, with optional field replacements."""
        if not self.is_instance(record):
            raise RecordError(f"Not a {self.tag} record: {record!r}")
        return dataclasses.replace(record, **changes)

    def is_instance(self, value: Any) -> bool:
        return isinstance(value, self.cls)

    def exports(self) -> Dict[str, Any]:
        """Every generated name mapped to its object."""
        names: Dict[str, Any] = {
            self.cls.__name__: self.cls,
            self.constructor_name: self.make,
            self.copier_name: self.copy,
        }
        for accessor in self.accessors.values():
            names[accessor.__name__] = accessor
        return names

    def install(self, target: Dict[str, Any]) -> None:
        """Bind the generated names into `target` (usually a module's globals())."""
        target.update(self.exports())

    def to_form(self, record: Any) -> List[Any]:
        """
        Tagged alist for `record`.

        A field holding None is left out whatever its default; reading
        the form back gives it None again. When every field is None the
        first field is still printed (as nil) so the form keeps at least
        one pair and reads back as a record.
        """
        form: List[Any] = [self.tag]
        for f in self.fields:
            value = getattr(record, f.name)
            if value is None:
                continue
            form.append(Pair(Symbol(f.name), value))
        if len(form) == 1:
            form.append(Pair(Symbol(self.fields[0].name), None))
        return form

    def from_fields(self, pairs: Sequence[Pair]) -> Any:
        """
        Record from (field . value) pairs whose values are already rebuilt.

        Fields without a pair are None. An empty list stands for nil, so it
        becomes False for a field whose default is a bool.
        """
        values: Dict[str, Any] = {f.name: None for f in self.fields}
        for pair in pairs:
            name = pair.key.name
            if name not in values:
                raise RecordError(f"Unknown fields for {self.tag}: {[name]}")
            value = pair.value
            if isinstance(value, list) and not value and isinstance(self.defaults[name], bool):
                value = False
            values[name] = value
        return self.cls(**values)

    def __repr__(self) -> str:
        return f"RecordFamily({self.tag}, fields={[f.name for f in self.fields]})"


class RecordRegistry:
    """
    Record families indexed by (namespace, name) and by printed tag.

    Redefining a family warns and replaces the previous definition.
    """

    def __init__(self):
        self._families: Dict[Tuple[str, str], RecordFamily] = {}

    def define(self, namespace: str, name: str, *fields: FieldSpec) -> RecordFamily:
        if not namespace or not name:
            raise RecordError("Record namespace and name must be non-empty")
        specs = [_coerce_field(f) for f in fields]
        if not specs:
            raise RecordError(f"Record {namespace}-{name} needs at least one field")
        for spec in specs:
            if (not spec.name.isidentifier() or keyword.iskeyword(spec.name)
                    or spec.name in RESERVED_FIELD_NAMES):
                raise RecordError(f"Invalid field name for {namespace}-{name}: {spec.name!r}")
        duplicate = has_duplicates([spec.name for spec in specs])
        if duplicate is not None:
            raise RecordError(f"Duplicate field name for {namespace}-{name}: {duplicate!r}")

        key = (namespace, name)
        if key in self._families:
            warnings.warn(f"Redefining record {namespace}-{name}", UserWarning)
        family = RecordFamily(namespace, name, specs)
        self._families[key] = family
        return family

    def get(self, namespace: str, name: str) -> Optional[RecordFamily]:
        return self._families.get((namespace, name))

    def by_tag(self, tag: Any) -> Optional[RecordFamily]:
        for family in self._families.values():
            if family.tag == tag:
                return family
        return None

    def families(self) -> List[RecordFamily]:
        return list(self._families.values())


REGISTRY = RecordRegistry()


def define_record(namespace: str, name: str, *fields: FieldSpec, registry: Optional[RecordRegistry] = None) -> RecordFamily:
    """Declare a record family in `registry` (the module REGISTRY by default)."""
    if registry is None:
        registry = REGISTRY
    return registry.define(namespace, name, *fields)


def record_to_form(record: Any) -> List[Any]:
    """Printed-form tree of a generated record."""
    family = getattr(record, "record_family", None)
    if not isinstance(family, RecordFamily):
        raise RecordError(f"Not a generated record: {record!r}")
    return family.to_form(record)


def _is_record_form(form: Any, registry: RecordRegistry) -> bool:
    return (
        isinstance(form, list)
        and len(form) > 1
        and isinstance(form[0], Symbol)
        and registry.by_tag(form[0]) is not None
        and all(isinstance(item, Pair) and isinstance(item.key, Symbol) for item in form[1:])
    )


def record_from_form(form: Any, registry: Optional[RecordRegistry] = None) -> Any:
    """
    Rebuild a record from its tagged-alist form.

    Nested record forms inside field values are rebuilt too. Fields
    missing from the form are None; a field read as nil is False when
    its default is a bool and an empty list otherwise.

    Raises:
        RecordError: If the form is not a tagged alist, the tag is not
            registered, or a field name is unknown
    """
    if registry is None:
        registry = REGISTRY
    if not isinstance(form, list) or not form or not isinstance(form[0], Symbol):
        raise RecordError(f"Not a record form: {form!r}")
    family = registry.by_tag(form[0])
    if family is None:
        raise RecordError(f"Unknown record tag: {form[0]}")

    pairs = []
    for item in form[1:]:
        if not isinstance(item, Pair) or not isinstance(item.key, Symbol):
            raise RecordError(f"Malformed field in {family.tag} form: {item!r}")
        pairs.append(Pair(item.key, restore_records(item.value, registry)))
    return family.from_fields(pairs)


def restore_records(form: Any, registry: Optional[RecordRegistry] = None) -> Any:
    """
    Walk a value tree read from disk, rebuilding every registered record form.

    Lists that are not record forms, pairs and atoms keep their shape.
    A list only counts as a record form when a registered tag is followed
    by at least one (field . value) pair. The walk uses an explicit stack,
    so nesting depth is not bounded by the interpreter's recursion limit.
    """
    if registry is None:
        registry = REGISTRY
    result: List[Any] = [None]
    # (node, target list, index into target, rebuilt children or None)
    stack: List[Tuple[Any, List[Any], int, Optional[List[Any]]]] = [(form, result, 0, None)]
    while stack:
        node, target, index, parts = stack.pop()
        if parts is not None:
            if isinstance(node, Pair):
                target[index] = Pair(parts[0], parts[1])
            elif _is_record_form(node, registry):
                target[index] = registry.by_tag(node[0]).from_fields(parts[1:])
            else:
                target[index] = parts
            continue
        if isinstance(node, Pair):
            children: Sequence[Any] = (node.key, node.value)
        elif isinstance(node, list):
            children = node
        else:
            target[index] = node
            continue
        parts = [None] * len(children)
        stack.append((node, target, index, parts))
        for i in reversed(range(len(children))):
            stack.append((children[i], parts, i, None))
    return result[0]


__all__ = [
    "RecordField",
    "RecordFamily",
    "RecordRegistry",
    "REGISTRY",
    "define_record",
    "record_to_form",
    "record_from_form",
    "restore_records",
]
