"""Format registry for hopping block serialization."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from hoppingpy.core import HoppingBlocks


Reader = Callable[[Any], HoppingBlocks]
Writer = Callable[[HoppingBlocks, Path], Path]


@dataclass(frozen=True)
class BlockFormat:
    name: str
    reader: Reader
    writer: Writer


_FORMATS: dict[str, BlockFormat] = {}


def register_format(name: str, reader: Reader, writer: Writer) -> None:
    key = name.strip().lower()
    if not key:
        raise ValueError("Format name must be non-empty.")
    _FORMATS[key] = BlockFormat(name=key, reader=reader, writer=writer)


def get_format(name: str) -> BlockFormat:
    key = name.strip().lower()
    try:
        return _FORMATS[key]
    except KeyError as exc:
        available = ", ".join(sorted(_FORMATS)) or "<none>"
        raise KeyError(f"Unknown hopping block format '{name}'. Available formats: {available}") from exc


def list_formats() -> tuple[str, ...]:
    return tuple(sorted(_FORMATS.keys()))


def read_blocks(source: Any, fmt: str) -> HoppingBlocks:
    return get_format(fmt).reader(source)


def write_blocks(blocks: HoppingBlocks, path: str | Path, fmt: str) -> Path:
    return get_format(fmt).writer(blocks, Path(path))
