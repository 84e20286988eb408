from __future__ import annotations

import threading
from typing import Any, Dict, Mapping, Optional, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from ...domain.exceptions import ResponseFormatError
from .codecs import CodecRegistry, default_codecs
from .shapes import Shape, ShapeCompiler

T = TypeVar("T")

Document = Union[bytes, str, Mapping[str, Any]]


class JsonMapper:
    """
    Converts JSON documents to typed values and back.

    - one strict pydantic TypeAdapter per destination shape, built lazily
    - wire field names are the snake_case form of the attribute names
    - types registered in the codec table go through that codec
    - unknown wire fields are ignored
    """

    def __init__(self, codecs: Optional[CodecRegistry] = None) -> None:
        self._codecs = codecs or default_codecs()
        self._compiler = ShapeCompiler(self._codecs)
        self._adapters: Dict[Any, TypeAdapter[Any]] = {}
        self._lock = threading.Lock()

    @property
    def codecs(self) -> CodecRegistry:
        return self._codecs

    def adapter(self, shape: Shape[T]) -> TypeAdapter[T]:
        with self._lock:
            adapter = self._adapters.get(shape.target)
            if adapter is None:
                adapter = TypeAdapter(self._compiler.compile(shape.target))
                self._adapters[shape.target] = adapter
            return adapter

    # ------------------------------------------------------------------ #
    # decoding
    # ------------------------------------------------------------------ #

    def decode(self, document: Document, shape: Shape[T]) -> T:
        """
        Decode a JSON document (raw bytes/text or parsed mapping) into `shape`.

        Raises:
            ResponseFormatError
        """
        adapter = self.adapter(shape)
        try:
            if isinstance(document, (bytes, bytearray, str)):
                return adapter.validate_json(document, strict=True)
            return adapter.validate_python(document, strict=True)
        except ValidationError as exc:
            raise ResponseFormatError(_describe(exc)) from exc
        except OverflowError as exc:
            raise ResponseFormatError(f"$: number out of range: {exc}") from exc

    # ------------------------------------------------------------------ #
    # encoding
    # ------------------------------------------------------------------ #

    def encode(self, value: T, shape: Shape[T]) -> Any:
        """Inverse of `decode`: value -> JSON-compatible mapping."""
        return self.adapter(shape).dump_python(value, mode="json", by_alias=True)

    def dumps(self, value: T, shape: Shape[T]) -> str:
        return self.adapter(shape).dump_json(value, by_alias=True).decode("utf-8")


def _describe(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors(include_url=False):
        path = "$" + "".join(
            f"[{part}]" if isinstance(part, int) else f".{part}"
            for part in error["loc"]
        )
        if error["type"] == "missing":
            message = "required field is missing"
        elif error["type"] == "json_invalid":
            message = f"Invalid JSON document: {error['msg']}"
        elif error.get("input", ...) is None:
            message = "required field is null"
        else:
            message = error["msg"]
        messages.append(f"{path}: {message}")
    return "; ".join(messages)
