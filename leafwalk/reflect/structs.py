# leafwalk/reflect/structs.py
from __future__ import annotations

import dataclasses
import logging
import threading
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

EMBEDDED_KEY = "leafwalk.embedded"


class SchemaRegistrationError(ValueError):
    pass


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    index: int
    annotation: Any = Any
    exported: bool = True
    embedded: bool = False

    @property
    def visible(self) -> bool:
        return self.exported and not self.embedded


def _read_attr(instance: Any, name: str) -> Any:
    return getattr(instance, name, None)


@dataclass(frozen=True)
class StructSchema:
    """
    Ordered field layout of a struct-like type.

    `reader` knows how to pull a named field off an instance; attribute
    access for classes, key lookup for `Record`.
    """

    type_name: str
    fields: Tuple[FieldDescriptor, ...]
    reader: Callable[[Any, str], Any] = _read_attr

    def visible_fields(self) -> Iterator[FieldDescriptor]:
        return (f for f in self.fields if f.visible)

    def field(self, name: str) -> Optional[FieldDescriptor]:
        for f in self.fields:
            if f.name == name and f.visible:
                return f
        return None

    def read(self, instance: Any, descriptor: FieldDescriptor) -> Any:
        return self.reader(instance, descriptor.name)


def embedded(**kwargs: Any) -> Any:
    """
    dataclasses.field() for a field that embeds another struct. Embedded
    fields are never enumerated nor addressable by path.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[EMBEDDED_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def _is_exported(name: str) -> bool:
    return not name.startswith("_")


def _type_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except Exception as e:
        # Unresolvable forward references: keep whatever is evaluated already.
        logger.debug("Could not resolve annotations of %s: %s", cls.__qualname__, e)
        hints: Dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            for k, v in getattr(klass, "__annotations__", {}).items():
                hints[k] = Any if isinstance(v, str) else v
        return hints


# ----------------------------
# Explicit registration
# ----------------------------
_registry: Dict[type, StructSchema] = {}
_registry_lock = threading.Lock()


def register_struct(
    cls: Optional[type] = None,
    *,
    fields: Optional[Iterable[Union[str, FieldDescriptor]]] = None,
    embedded_fields: Iterable[str] = (),
):
    """
    Declare a plain class as struct-like.

    Usable directly (`register_struct(Point, fields=["x", "y"])`) or as a
    class decorator (`@register_struct(fields=[...])`). Without `fields`
    the class annotations give the field order.
    """

    def wrap(klass: type) -> type:
        if not isinstance(klass, type):
            raise SchemaRegistrationError(f"Only classes can be registered, got {klass!r}")

        hints = _type_hints(klass)
        names: List[Union[str, FieldDescriptor]] = list(fields) if fields is not None else list(hints)
        if not names:
            raise SchemaRegistrationError(
                f"{klass.__qualname__} declares no annotations; pass fields= explicitly"
            )

        hidden = set(embedded_fields)
        descriptors: List[FieldDescriptor] = []
        seen = set()
        for idx, item in enumerate(names):
            if isinstance(item, FieldDescriptor):
                desc = dataclasses.replace(item, index=idx)
            else:
                desc = FieldDescriptor(
                    name=item,
                    index=idx,
                    annotation=hints.get(item, Any),
                    exported=_is_exported(item),
                    embedded=item in hidden,
                )
            if desc.name in seen:
                raise SchemaRegistrationError(f"Duplicate field {desc.name!r} on {klass.__qualname__}")
            seen.add(desc.name)
            descriptors.append(desc)

        with _registry_lock:
            _registry[klass] = StructSchema(type_name=klass.__qualname__, fields=tuple(descriptors))
            schema_for_type.cache_clear()
        return klass

    return wrap if cls is None else wrap(cls)


def unregister_struct(cls: type) -> None:
    with _registry_lock:
        _registry.pop(cls, None)
        schema_for_type.cache_clear()


# ----------------------------
# Schema derivation
# ----------------------------
def _dataclass_schema(cls: type) -> StructSchema:
    hints = _type_hints(cls)
    descriptors = tuple(
        FieldDescriptor(
            name=f.name,
            index=idx,
            annotation=hints.get(f.name, Any),
            exported=_is_exported(f.name),
            embedded=bool(f.metadata.get(EMBEDDED_KEY, False)),
        )
        for idx, f in enumerate(dataclasses.fields(cls))
    )
    return StructSchema(type_name=cls.__qualname__, fields=descriptors)


def _namedtuple_schema(cls: type) -> StructSchema:
    hints = _type_hints(cls)
    descriptors = tuple(
        FieldDescriptor(
            name=name,
            index=idx,
            annotation=hints.get(name, Any),
            exported=_is_exported(name),
        )
        for idx, name in enumerate(cls._fields)
    )
    return StructSchema(type_name=cls.__qualname__, fields=descriptors)


def _is_namedtuple_type(cls: type) -> bool:
    return issubclass(cls, tuple) and isinstance(getattr(cls, "_fields", None), tuple)


@lru_cache(maxsize=None)
def schema_for_type(cls: type) -> Optional[StructSchema]:
    """
    Static struct layout of `cls`, or None when instances of `cls` are not
    struct-like. Registered classes win over derived layouts.
    """
    for klass in cls.__mro__:
        if klass in _registry:
            return _registry[klass]
    if dataclasses.is_dataclass(cls):
        return _dataclass_schema(cls)
    if _is_namedtuple_type(cls):
        return _namedtuple_schema(cls)
    return None


# ----------------------------
# Record: struct view over a mapping
# ----------------------------
def _read_record(instance: "Record", name: str) -> Any:
    return instance.get(name)


class Record:
    """
    Struct-like view over a mapping with string keys.

    Field order follows the mapping's insertion order; keys starting with
    "_" are unexported. Plain mappings stay leaves, wrapping one in a
    Record makes its keys traversable.
    """

    __slots__ = ("_data", "_schema")

    def __init__(self, data: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        merged: Dict[str, Any] = dict(data or {})
        merged.update(fields)
        self._data = merged
        self._schema: Optional[StructSchema] = None

    @property
    def schema(self) -> StructSchema:
        if self._schema is None:
            descriptors = tuple(
                FieldDescriptor(name=k, index=idx, exported=_is_exported(k))
                for idx, k in enumerate(k for k in self._data if isinstance(k, str))
            )
            self._schema = StructSchema(type_name="Record", fields=descriptors, reader=_read_record)
        return self._schema

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def keys(self):
        return self._data.keys()

    def items(self):
        return self._data.items()

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Record({self._data!r})"


# ----------------------------
# Lookups used by the classifiers
# ----------------------------
def schema_of(value: Any) -> Optional[StructSchema]:
    if isinstance(value, Record):
        return value.schema
    if value is None or isinstance(value, type):
        return None
    return schema_for_type(type(value))


def is_struct(value: Any) -> bool:
    return schema_of(value) is not None


def is_struct_type(tp: Any) -> bool:
    if not isinstance(tp, type):
        return False
    return issubclass(tp, Record) or schema_for_type(tp) is not None
