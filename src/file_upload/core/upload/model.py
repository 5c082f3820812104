from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

REQUIRED_FIELDS: tuple[str, ...] = ("name", "declared_type", "size", "temp_location", "error_code")


def derive_extension(name: str) -> str | None:
    """Suffix after the last dot of the basename, case preserved; None without a dot."""
    basename = name.rsplit("/", 1)[-1]
    if "." not in basename:
        return None
    return basename.rsplit(".", 1)[1]


@dataclass(frozen=True)
class UploadRecord:
    name: str
    declared_type: str
    size: int
    temp_location: str
    error_code: int
    extension: str | None = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extension", derive_extension(self.name))

    @classmethod
    def from_mapping(cls, fields: Mapping[str, Any]) -> "UploadRecord":
        missing = [name for name in REQUIRED_FIELDS if fields.get(name) is None]
        if missing:
            raise KeyError(f"Missing upload fields: {', '.join(missing)}")
        return cls(
            name=fields["name"],
            declared_type=fields["declared_type"],
            size=fields["size"],
            temp_location=fields["temp_location"],
            error_code=fields["error_code"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "declared_type": self.declared_type,
            "size": self.size,
            "temp_location": self.temp_location,
            "error_code": self.error_code,
        }


def _as_frozenset(values: Iterable[str] | None) -> frozenset[str] | None:
    if values is None:
        return None
    if isinstance(values, str):
        return frozenset({values})
    return frozenset(values)


@dataclass(frozen=True)
class ValidationOptions:
    """Acceptance policy for an upload. A field left as None applies no constraint."""

    max_size: int | None = None
    allowed_types: frozenset[str] | None = None
    allowed_extensions: frozenset[str] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed_types", _as_frozenset(self.allowed_types))
        object.__setattr__(self, "allowed_extensions", _as_frozenset(self.allowed_extensions))