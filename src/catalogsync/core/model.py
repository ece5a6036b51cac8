"""Core data model for catalogsync.

Scope:
- Dependency coordinates (`ModuleId`) and shared version references (`VersionRef`).
- The order-preserving catalog document: sections of raw or generated lines.
- Does NOT implement parsing/rendering (see `catalogsync.codecs`).

This module must not import codecs/io/cli.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Iterator, Union


def _norm_str(value: object, *, where: str) -> str:
    """Normalize a required string: strip and reject empty/whitespace."""
    if not isinstance(value, str):
        raise ValueError(f"{where}: expected str, got {type(value).__name__}")
    s = value.strip()
    if not s:
        raise ValueError(f"{where}: must be a non-empty string")
    return s


def _opt_str(value: object, *, where: str) -> str | None:
    if value is None:
        return None
    return _norm_str(value, where=where)


@dataclass(frozen=True)
class ModuleId:
    """A dependency coordinate: `group:name` plus an optional version.

    Dedup identity is `module_key` (`group:name`); the version does not take part.
    """

    group: str | None
    name: str
    version: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "group", _opt_str(self.group, where="ModuleId.group"))
        object.__setattr__(self, "name", _norm_str(self.name, where="ModuleId.name"))
        object.__setattr__(self, "version", _opt_str(self.version, where="ModuleId.version"))

    @property
    def module_key(self) -> str:
        return f"{self.group}:{self.name}"

    def __str__(self) -> str:
        if self.version is None:
            return self.module_key
        return f"{self.module_key}:{self.version}"


@dataclass(frozen=True)
class VersionRef:
    """A named, reusable version value (`[versions]` entry)."""

    key: str
    version: str


@dataclass(frozen=True)
class SectionKind:
    """Closed set of section kinds; anything else is `SectionKind.other(name)`.

    `name` is the exact header text between the brackets.
    """

    name: str

    ROOT: ClassVar["SectionKind"]
    VERSIONS: ClassVar["SectionKind"]
    LIBRARIES: ClassVar["SectionKind"]
    BUNDLES: ClassVar["SectionKind"]
    PLUGINS: ClassVar["SectionKind"]

    @classmethod
    def other(cls, name: str) -> "SectionKind":
        return cls(name)

    @classmethod
    def from_name(cls, name: str) -> "SectionKind":
        return _KNOWN_KINDS.get(name) or cls.other(name)

    @property
    def is_root(self) -> bool:
        return self.name == "root"

    @property
    def is_known(self) -> bool:
        return self.name in _KNOWN_KINDS


_KNOWN_KINDS: dict[str, SectionKind] = {
    name: SectionKind(name) for name in ("root", "versions", "libraries", "bundles", "plugins")
}

SectionKind.ROOT = _KNOWN_KINDS["root"]
SectionKind.VERSIONS = _KNOWN_KINDS["versions"]
SectionKind.LIBRARIES = _KNOWN_KINDS["libraries"]
SectionKind.BUNDLES = _KNOWN_KINDS["bundles"]
SectionKind.PLUGINS = _KNOWN_KINDS["plugins"]


@dataclass(frozen=True)
class RawLine:
    """A line kept verbatim from the source text (comments and blanks included)."""

    text: str


@dataclass(frozen=True)
class GeneratedLine:
    """A `key = value` or `key = { field = value, ... }` entry produced by the merger.

    Exactly one of `value` / `fields` is meaningful. Fields with a `None` value
    are dropped at construction so the rendered table never shows them.
    """

    key: str
    value: str | None = None
    fields: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", _norm_str(self.key, where="GeneratedLine.key"))
        object.__setattr__(
            self,
            "fields",
            tuple((str(k), str(v)) for k, v in self.fields if v is not None),
        )

    @classmethod
    def table(cls, key: str, fields: Iterable[tuple[str, str | None]]) -> "GeneratedLine":
        return cls(key, fields=tuple(fields))  # type: ignore[arg-type]

    @property
    def is_table(self) -> bool:
        return self.value is None

    def field_value(self, name: str) -> str | None:
        for k, v in self.fields:
            if k == name:
                return v
        return None


Line = Union[RawLine, GeneratedLine]

BLANK_LINE = RawLine("")


@dataclass
class Section:
    """An ordered, mutable block of lines under one header."""

    kind: SectionKind
    lines: list[Line] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.kind.name


class CatalogDocument:
    """Ordered mapping `SectionKind -> Section`.

    The root section always exists and always comes first. Sections keep the
    order in which they were first seen; sections created later are appended.
    """

    def __init__(self, sections: Iterable[Section] = ()) -> None:
        self._sections: dict[SectionKind, Section] = {SectionKind.ROOT: Section(SectionKind.ROOT)}
        for sec in sections:
            self._sections[sec.kind] = sec

    def __contains__(self, kind: object) -> bool:
        return kind in self._sections

    def __iter__(self) -> Iterator[Section]:
        return iter(list(self._sections.values()))

    def __len__(self) -> int:
        return len(self._sections)

    @property
    def kinds(self) -> list[SectionKind]:
        return list(self._sections)

    def get(self, kind: SectionKind) -> Section | None:
        return self._sections.get(kind)

    def section(self, kind: SectionKind) -> Section:
        """Return the section for `kind`, creating an empty one at the end if missing."""
        sec = self._sections.get(kind)
        if sec is None:
            sec = Section(kind)
            self._sections[kind] = sec
        return sec

    def replace(self, kind: SectionKind, lines: Iterable[Line]) -> Section:
        """Start a fresh body for `kind`; an existing section keeps its position."""
        sec = self.section(kind)
        sec.lines = list(lines)
        return sec

    def merge(self, kind: SectionKind, lines: Iterable[Line]) -> Section:
        """Append `lines` to the end of the section; existing lines are left untouched."""
        sec = self.section(kind)
        sec.lines.extend(lines)
        return sec

    def __repr__(self) -> str:
        names = ", ".join(f"{s.name}({len(s.lines)})" for s in self)
        return f"CatalogDocument([{names}])"
