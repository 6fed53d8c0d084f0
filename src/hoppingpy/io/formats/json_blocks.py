"""JSON format for small hopping block stores."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from hoppingpy.core import HoppingBlocks


logger = logging.getLogger(__name__)


def write_json_blocks(blocks: HoppingBlocks, path: Path) -> Path:
    names = blocks.family_names
    payload = {
        "num_sites": blocks.num_sites,
        "index_dtype": str(blocks.index_dtype),
        "families": [
            {
                "name": names[family_id] if names is not None else None,
                "rows": block.rows.tolist(),
                "cols": block.cols.tolist(),
            }
            for family_id, block in blocks
        ],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2)
        fh.write("\n")
    logger.debug("Wrote %d hoppings to %s", blocks.nnz(), path)
    return path


def _load_payload(source: Any) -> dict[str, Any]:
    if isinstance(source, dict):
        return source
    with Path(source).open("r", encoding="utf-8-sig") as fh:
        payload = json.load(fh)
    if not isinstance(payload, dict):
        raise ValueError("Hopping block JSON must be an object.")
    return payload


def read_json_blocks(source: Any) -> HoppingBlocks:
    """Read blocks from a JSON path or an already-parsed payload dict."""

    payload = _load_payload(source)
    try:
        families = list(payload["families"])
        num_sites = int(payload["num_sites"])
    except KeyError as exc:
        raise ValueError(f"Hopping block JSON is missing field {exc}.") from exc

    dtype = payload.get("index_dtype", "int32")
    blocks = []
    names = []
    for entry in families:
        rows = np.asarray(entry.get("rows", []), dtype=dtype)
        cols = np.asarray(entry.get("cols", []), dtype=dtype)
        blocks.append((rows, cols))
        names.append(entry.get("name"))

    if all(n is None for n in names):
        family_names = None
    elif any(n is None for n in names):
        raise ValueError("Hopping block JSON must name either all families or none.")
    else:
        family_names = names
    return HoppingBlocks.from_blocks(blocks, num_sites=num_sites, family_names=family_names, index_dtype=dtype)
