from __future__ import annotations

import dataclasses
import types
from dataclasses import dataclass
from typing import Annotated, Any, Dict, Generic, List, TypeVar, Union, get_args, get_origin, get_type_hints

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer, PlainValidator, create_model
from pydantic.alias_generators import to_snake

from ...domain.ports import ValueCodec
from .codecs import CodecRegistry

T = TypeVar("T")

# wire objects: snake_case keys, no coercion, unknown keys ignored
WIRE_CONFIG = ConfigDict(
    strict=True,
    alias_generator=to_snake,
    allow_inf_nan=False,
    extra="ignore",
    protected_namespaces=(),
)


@dataclass(frozen=True)
class Shape(Generic[T]):
    """
    Destination shape of a response: the type the JSON document decodes to.

    `target` is usually a dataclass; pydantic models and plain JSON types
    (``dict[str, Any]``, ``list[int]`` ...) work as well.
    """
    target: Any


def shape_of(target: Any) -> Shape[Any]:
    return Shape(target)


class ShapeCompiler:
    """
    Turns destination types into annotations pydantic can validate.

    - types registered in the codec table get a PlainValidator /
      PlainSerializer pair calling that codec
    - dataclasses are mirrored as pydantic models using WIRE_CONFIG and
      converted back to the dataclass after validation
    - containers, unions and Annotated hints are rebuilt around their
      compiled arguments

    Not thread-safe; the mapper serialises access.
    """

    def __init__(self, codecs: CodecRegistry) -> None:
        self._codecs = codecs
        self._models: Dict[type, type[BaseModel]] = {}
        self._namespace: Dict[str, Any] = {}
        self._building: List[type] = []

    def compile(self, hint: Any) -> Any:
        compiled = self._compile(hint)
        self._complete()
        return compiled

    # ------------------------------------------------------------------ #
    # hints
    # ------------------------------------------------------------------ #

    def _compile(self, hint: Any) -> Any:
        codec = self._codecs.get(hint)
        if codec is not None:
            return Annotated[hint, PlainValidator(_validator(codec)), PlainSerializer(codec.encode)]

        if isinstance(hint, type) and dataclasses.is_dataclass(hint):
            return self._dataclass(hint)

        origin = get_origin(hint)
        if origin is None:
            return hint

        args = get_args(hint)
        if origin is Annotated:
            return Annotated[(self._compile(args[0]), *args[1:])]
        if origin is Union or origin is types.UnionType:
            return Union[tuple(self._compile(a) for a in args)]
        try:
            return origin[tuple(self._compile(a) for a in args)]
        except TypeError:
            # Literal, Callable and friends stay as written
            return hint

    def _dataclass(self, cls: type) -> Any:
        ref = f"_wire_{id(cls):x}"
        if cls not in self._models and cls not in self._building:
            self._build_model(cls, ref)

        def to_dataclass(model: BaseModel) -> Any:
            return cls(**{name: getattr(model, name) for name in type(model).model_fields})

        def to_wire(value: Any) -> Any:
            model_cls = self._models[cls]
            values = {
                info.alias or name: getattr(value, name)
                for name, info in model_cls.model_fields.items()
            }
            return model_cls.model_construct(**values).model_dump(mode="json", by_alias=True)

        # a dataclass still being built is referenced by name, resolved in _complete
        target = ref if cls in self._building else self._models[cls]
        return Annotated[target, AfterValidator(to_dataclass), PlainSerializer(to_wire)]

    def _build_model(self, cls: type, ref: str) -> None:
        self._building.append(cls)
        try:
            hints = get_type_hints(cls, include_extras=True)
            fields: Dict[str, Any] = {}
            for f in dataclasses.fields(cls):
                if not f.init:
                    continue
                hint = self._compile(hints[f.name])
                fields[f.name] = (hint, _field_info(f, hints[f.name]))
            model = create_model(f"{cls.__name__}Wire", __config__=WIRE_CONFIG, **fields)
        finally:
            self._building.pop()

        self._models[cls] = model
        self._namespace[ref] = model

    def _complete(self) -> None:
        if self._building:
            return
        pending = [m for m in self._models.values() if not m.__pydantic_complete__]
        for model in pending:
            model.model_rebuild(_types_namespace=self._namespace, raise_errors=False)
        for model in pending:
            if not model.__pydantic_complete__:
                model.model_rebuild(_types_namespace=self._namespace)


def _field_info(f: dataclasses.Field, hint: Any) -> Any:
    if f.default is not dataclasses.MISSING:
        return Field(default=f.default)
    if f.default_factory is not dataclasses.MISSING:
        return Field(default_factory=f.default_factory)
    if _is_optional(hint):
        return Field(default=None)
    return Field()


def _is_optional(hint: Any) -> bool:
    origin = get_origin(hint)
    if origin is Annotated:
        return _is_optional(get_args(hint)[0])
    return (origin is Union or origin is types.UnionType) and type(None) in get_args(hint)


def _validator(codec: ValueCodec[Any]) -> Any:
    def validate(raw: Any) -> Any:
        # null only reaches here for non-optional fields
        if raw is None:
            raise ValueError("value is required")
        return codec.decode(raw)

    return validate
