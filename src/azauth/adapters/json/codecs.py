from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from ...domain.exceptions import ResponseFormatError
from ...domain.ports import ValueCodec
from ...domain.value_objects import Color

_HEX_COLOR = re.compile(r"#?([0-9A-Fa-f]{6})([0-9A-Fa-f]{2})?")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ColorCodec:
    """
    Color <-> hex string.

    Encodes as ``#RRGGBB`` (or ``#RRGGBBAA`` for translucent colors).
    Also decodes packed ``0xRRGGBB`` integers.
    """

    def encode(self, value: Optional[Color]) -> Optional[str]:
        if value is None:
            return None
        return str(value)

    def decode(self, raw: Any) -> Optional[Color]:
        if raw is None:
            return None

        if isinstance(raw, bool):
            raise ResponseFormatError(f"Invalid color: {raw!r}")

        if isinstance(raw, int):
            try:
                return Color.from_rgb(raw)
            except ValueError as exc:
                raise ResponseFormatError(f"Invalid color: {raw!r}") from exc

        if not isinstance(raw, str):
            raise ResponseFormatError(f"Invalid color: {raw!r}")

        match = _HEX_COLOR.fullmatch(raw.strip())
        if not match:
            raise ResponseFormatError(f"Invalid color: {raw!r}")

        rgb, alpha = match.groups()
        color = Color.from_rgb(int(rgb, 16))
        if alpha is None:
            return color
        return Color(color.red, color.green, color.blue, int(alpha, 16))


class InstantCodec:
    """
    UTC datetime <-> ISO-8601 string (``2021-05-04T12:30:00Z``).

    Also decodes ISO-8601 strings with an explicit offset and numeric epoch
    seconds. Naive datetimes are taken to be UTC.
    """

    def encode(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        timespec = "microseconds" if value.microsecond else "seconds"
        return value.replace(tzinfo=None).isoformat(timespec=timespec) + "Z"

    def decode(self, raw: Any) -> Optional[datetime]:
        if raw is None:
            return None

        if isinstance(raw, bool):
            raise ResponseFormatError(f"Invalid instant: {raw!r}")

        if isinstance(raw, (int, float)):
            try:
                return _EPOCH + timedelta(seconds=raw)
            except (OverflowError, ValueError) as exc:
                raise ResponseFormatError(f"Instant out of range: {raw!r}") from exc

        if not isinstance(raw, str):
            raise ResponseFormatError(f"Invalid instant: {raw!r}")

        text = raw.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ResponseFormatError(f"Invalid instant: {raw!r}") from exc

        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        try:
            return value.astimezone(timezone.utc)
        except OverflowError as exc:
            raise ResponseFormatError(f"Instant out of range: {raw!r}") from exc


class CodecRegistry:
    """
    Table of value codecs keyed by the domain type they handle.

    Each mapper owns its own registry, so differently configured clients
    never share codecs.
    """

    def __init__(self, codecs: Optional[Dict[type, ValueCodec[Any]]] = None) -> None:
        self._codecs: Dict[type, ValueCodec[Any]] = dict(codecs or {})

    def register(self, value_type: type, codec: ValueCodec[Any]) -> CodecRegistry:
        self._codecs[value_type] = codec
        return self

    def get(self, value_type: Any) -> Optional[ValueCodec[Any]]:
        if not isinstance(value_type, type):
            return None
        return self._codecs.get(value_type)

    def __contains__(self, value_type: Any) -> bool:
        return self.get(value_type) is not None


def default_codecs() -> CodecRegistry:
    """Fresh registry with the color and instant codecs."""
    return CodecRegistry({Color: ColorCodec(), datetime: InstantCodec()})
