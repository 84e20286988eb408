from __future__ import annotations

from typing import Any, Protocol, TypeVar

V = TypeVar("V")


class ValueCodec(Protocol[V]):
    """
    Port for converting one domain value type to and from its JSON form.

    Implementations live in the adapters layer (e.g. color / instant codecs).
    """

    def encode(self, value: V | None) -> Any:
        """
        Convert a domain value into a JSON-compatible value.

        Must accept every representable value; ``None`` encodes to ``None``.
        """
        ...

    def decode(self, raw: Any) -> V | None:
        """
        Convert a JSON value back into the domain value.

        Should accept anything `encode` produces.
        Raises:
          - ResponseFormatError for values outside the wire representation
        """
        ...
