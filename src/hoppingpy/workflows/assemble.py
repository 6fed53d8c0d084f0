"""Config-driven runner that assembles a toy model and exports its hoppings."""

from __future__ import annotations

import argparse
import hashlib
import json
import logging
import re
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from hoppingpy.core import HoppingModel
from hoppingpy.io import list_formats, write_blocks
from hoppingpy.modeling import BuildConfig, build_hamiltonian
from hoppingpy.models import ChainParams, SquareLatticeParams, chain_model, square_lattice_model


logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _sanitize_token(value: str) -> str:
    token = re.sub(r"[^A-Za-z0-9._-]+", "_", value.strip())
    return token if token else "unnamed"


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as fh:
        while True:
            chunk = fh.read(1024 * 1024)
            if not chunk:
                break
            h.update(chunk)
    return h.hexdigest()


def _resolve_path(base_dir: Path, path_like: str | Path) -> Path:
    p = Path(path_like)
    return p if p.is_absolute() else (base_dir / p)


def _to_builtin(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (np.floating, np.integer)):
        return value.item()
    if isinstance(value, dict):
        return {str(k): _to_builtin(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_builtin(v) for v in value]
    return value


def _load_json_config(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8-sig") as fh:
        cfg = json.load(fh)
    if not isinstance(cfg, dict):
        raise ValueError("Input config must be a JSON object.")
    return cfg


def _save_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(_to_builtin(payload), fh, indent=2, sort_keys=True)
        fh.write("\n")


def _build_model(model_cfg: dict[str, Any], config: BuildConfig) -> HoppingModel:
    params = dict(model_cfg)
    kind = str(params.pop("kind", "square")).lower()
    if kind == "chain":
        return chain_model(ChainParams(**params), config=config)
    if kind == "square":
        return square_lattice_model(SquareLatticeParams(**params), config=config)
    raise ValueError("model.kind must be one of: chain, square.")


def _default_template() -> dict[str, Any]:
    return {
        "run": {
            "name": "square_assembly",
            "output_dir": "outputs/assembly_runs",
            "format": "npz",
            "write_blocks": True,
            "write_report": True,
            "build_hamiltonian": True,
        },
        "model": {
            "kind": "square",
            "nx": 64,
            "ny": 64,
            "tx": -1.0,
            "ty": -1.0,
            "onsite": 0.0,
            "periodic_x": True,
            "periodic_y": False,
        },
        "build": {
            "index_dtype": "int32",
            "validate": True,
            "hermitian": True,
        },
    }


def write_input_template(path: str | Path) -> Path:
    out = Path(path)
    _save_json(out, _default_template())
    return out


def run_assembly(config_path: str | Path) -> dict[str, Any]:
    cfg_path = Path(config_path)
    cfg_dir = cfg_path.parent if cfg_path.parent != Path("") else Path(".")
    cfg = _load_json_config(cfg_path)

    run_cfg = dict(cfg.get("run", {}))
    run_name = str(run_cfg.get("name", f"assembly_{cfg_path.stem}"))
    output_dir = _resolve_path(cfg_dir, run_cfg.get("output_dir", "outputs/assembly_runs"))
    fmt = str(run_cfg.get("format", "npz")).lower()
    if fmt not in list_formats():
        raise ValueError(f"run.format must be one of: {', '.join(list_formats())}.")
    write_blocks_file = bool(run_cfg.get("write_blocks", True))
    write_report = bool(run_cfg.get("write_report", True))
    with_hamiltonian = bool(run_cfg.get("build_hamiltonian", True))

    config = BuildConfig.from_dict(dict(cfg.get("build", {})))
    model_cfg = dict(cfg.get("model", {}))

    t0 = time.perf_counter()
    started = _utc_now_iso()
    logger.info("Starting assembly run '%s'", run_name)
    model = _build_model(model_cfg, config)
    t_assembled = time.perf_counter()

    csr = model.blocks.to_csr(dtype=config.value_dtype)
    t_converted = time.perf_counter()

    hamiltonian_nnz = None
    is_hermitian = None
    if with_hamiltonian:
        h = build_hamiltonian(model.blocks, model.families, model.onsite, config=config)
        hamiltonian_nnz = int(h.nnz)
        is_hermitian = (h - h.conj().T).count_nonzero() == 0

    outputs: dict[str, Any] = {}
    stem = _sanitize_token(run_name)
    if write_blocks_file:
        outputs["blocks"] = write_blocks(model.blocks, output_dir / f"{stem}_blocks.{fmt}", fmt)

    report: dict[str, Any] = {
        "run": {
            "name": run_name,
            "started_utc": started,
            "finished_utc": _utc_now_iso(),
            "runtime_seconds": time.perf_counter() - t0,
            "assembly_seconds": t_assembled - t0,
            "conversion_seconds": t_converted - t_assembled,
            "config_path": str(cfg_path.resolve()),
            "config_sha256": _sha256_file(cfg_path),
        },
        "model": {
            "kind": str(model_cfg.get("kind", "square")),
            "num_sites": model.num_sites,
            "num_families": model.num_families,
            "family_names": [f.name for f in model.families],
            "counts": model.blocks.counts(),
        },
        "matrix": {
            "nnz": model.blocks.nnz(),
            "indptr_last": int(csr.indptr[-1]),
            "value_dtype": str(csr.dtype),
            "hamiltonian_nnz": hamiltonian_nnz,
            "hamiltonian_is_hermitian": is_hermitian,
        },
        "outputs": outputs,
    }
    if write_report:
        report_path = output_dir / f"{stem}_report.json"
        outputs["report"] = str(report_path)
        _save_json(report_path, report)
    logger.info("Finished run '%s': nnz=%d", run_name, report["matrix"]["nnz"])
    return report


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--input", type=Path, default=None, help="Path to JSON run configuration.")
    parser.add_argument("--write-template", type=Path, default=None, help="Write template config and exit.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.write_template is not None:
        out = write_input_template(args.write_template)
        print(f"Wrote template: {out}")
        return
    if args.input is None:
        raise ValueError("Provide --input <config.json> or --write-template <path>.")

    report = run_assembly(args.input)
    print(f"Run complete: {report['run']['name']}")
    print(f"nnz={report['matrix']['nnz']}")
    print(f"runtime_seconds={report['run']['runtime_seconds']:.3f}")
    print(f"outputs={_to_builtin(report['outputs'])}")


if __name__ == "__main__":
    main()
