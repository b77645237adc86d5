"""
symbol_specs.py - Symbol specifications: which tile slots form multi-tile symbols.

File format (YAML), one entry per multi-tile symbol:
  battery: "0x90:3"
  home_arrow: "112:2"

Keys are free-form names; values are "<start tile index>:<span>" with a
decimal or 0x-hex start index. Entries are stored as loaded, they are not
checked against each other.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

import yaml

from .errors import FontToolError, open_file

SPEC_RE = re.compile(r"\A(?P<start>0x[0-9a-fA-F]+|\d+):(?P<span>\d+)\Z")


class SymbolSpecsFileStructureError(FontToolError):
    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class InvalidSymbolSpecError(FontToolError):
    def __init__(self, path: str, name: str, spec: str):
        super().__init__(f"{path}: invalid symbol spec for `{name}`: `{spec}`")
        self.path = path
        self.name = name
        self.spec = spec


@dataclass(frozen=True)
class SymbolSpec:
    start_tile_index: int
    span: int

    @property
    def end_tile_index(self) -> int:
        return self.start_tile_index + self.span

    def tile_index_range(self) -> range:
        return range(self.start_tile_index, self.end_tile_index)


def parse_spec(s: str) -> Optional[SymbolSpec]:
    m = SPEC_RE.match(s.strip())
    if not m:
        return None
    return SymbolSpec(int(m.group("start"), 0), int(m.group("span")))


class SymbolSpecs:
    def __init__(self, specs: Iterable[SymbolSpec] = ()):
        self._specs: List[SymbolSpec] = list(specs)
        self._by_start: Dict[int, SymbolSpec] = {}
        for spec in self._specs:
            self._by_start.setdefault(spec.start_tile_index, spec)

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[SymbolSpec]:
        return iter(self._specs)

    def find_start_index(self, start_tile_index: int) -> Optional[SymbolSpec]:
        return self._by_start.get(start_tile_index)

    @classmethod
    def from_mapping(cls, mapping: Dict[str, str], path: str = "<mapping>") -> "SymbolSpecs":
        specs = []
        for name, value in mapping.items():
            if not isinstance(value, str):
                raise InvalidSymbolSpecError(path, str(name), repr(value))
            spec = parse_spec(value)
            if spec is None:
                raise InvalidSymbolSpecError(path, str(name), value)
            specs.append(spec)
        return cls(specs)

    @classmethod
    def load_file(cls, path: str) -> "SymbolSpecs":
        with open_file(path, "rb") as f:
            try:
                # BaseLoader keeps every scalar a string, "1:2" would otherwise
                # be read as a YAML 1.1 sexagesimal integer.
                data = yaml.load(f, Loader=yaml.BaseLoader)
            except yaml.YAMLError as e:
                raise SymbolSpecsFileStructureError(str(path), str(e)) from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SymbolSpecsFileStructureError(str(path), "expected a mapping of name: \"start:span\"")
        return cls.from_mapping(data, str(path))
