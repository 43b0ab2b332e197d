"""Median filter settings."""

from __future__ import annotations

from pathlib import Path

import msgspec

from .median3d import ExtentError, validate_extent


class MedianFilterConfig(msgspec.Struct, frozen=True):
    extent: list[int] = msgspec.field(default_factory=lambda: [3])

    def __post_init__(self) -> None:
        # raised errors become msgspec.ValidationError when decoding
        validate_extent(self.extent)

    @classmethod
    def from_json(cls, data: bytes | str) -> MedianFilterConfig:
        return msgspec.json.decode(data, type=cls)

    @classmethod
    def from_json_file(cls, path: Path) -> MedianFilterConfig:
        with Path(path).open("rb") as f:
            return cls.from_json(f.read())

    def to_json(self) -> bytes:
        return msgspec.json.encode(self)

    def full_extent(self) -> tuple[int, int, int]:
        return validate_extent(self.extent)


def parse_extent(text: str) -> list[int]:
    """Parse a comma-separated list of integers, e.g. ``"3,5,3"``.

    Only the syntax is checked here; odd values and the number of entries are
    validated when the extent is applied.
    """
    try:
        return [int(item) for item in text.split(",")]
    except ValueError:
        raise ExtentError(f"expected comma-separated integers for extent, got {text!r}") from None
