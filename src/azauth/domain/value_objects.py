# src/azauth/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Color:
    """
    An RGB(A) color, as used for player role colors.

    Every channel is an integer in the 0..255 range; alpha defaults to
    fully opaque.
    """
    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for channel in ("red", "green", "blue", "alpha"):
            value = getattr(self, channel)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Color {channel} must be an int, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"Color {channel} out of range: {value!r}")

    @classmethod
    def from_rgb(cls, packed: int) -> Color:
        """Build an opaque color from a packed ``0xRRGGBB`` integer."""
        if isinstance(packed, bool) or not isinstance(packed, int) or not 0 <= packed <= 0xFFFFFF:
            raise ValueError(f"Invalid packed RGB value: {packed!r}")
        return cls((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF)

    @property
    def rgb(self) -> int:
        return (self.red << 16) | (self.green << 8) | self.blue

    @property
    def opaque(self) -> bool:
        return self.alpha == 255

    def __str__(self) -> str:
        text = f"#{self.red:02X}{self.green:02X}{self.blue:02X}"
        return text if self.opaque else f"{text}{self.alpha:02X}"
