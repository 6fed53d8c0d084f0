import json

from hoppingpy.io import read_blocks
from hoppingpy.workflows.assemble import run_assembly, write_input_template


def test_template_run_writes_blocks_and_report(tmp_path) -> None:
    cfg_path = write_input_template(tmp_path / "assemble.json")
    cfg = json.loads(cfg_path.read_text(encoding="utf-8"))
    cfg["model"].update({"nx": 5, "ny": 4})
    cfg["run"]["output_dir"] = "out"
    cfg_path.write_text(json.dumps(cfg), encoding="utf-8")

    report = run_assembly(cfg_path)

    assert report["model"]["num_sites"] == 20
    assert report["matrix"]["nnz"] == 5 * 4 + 5 * 3
    assert report["matrix"]["indptr_last"] == report["matrix"]["nnz"]
    assert report["matrix"]["hamiltonian_is_hermitian"] is True
    blocks = read_blocks(report["outputs"]["blocks"], "npz")
    assert blocks.nnz() == report["matrix"]["nnz"]
    saved = json.loads((tmp_path / "out" / "square_assembly_report.json").read_text(encoding="utf-8"))
    assert saved["model"]["counts"] == [20, 15]


def test_chain_run_with_json_output(tmp_path) -> None:
    cfg = {
        "run": {"name": "chain run", "output_dir": str(tmp_path), "format": "json", "build_hamiltonian": False},
        "model": {"kind": "chain", "n_sites": 8, "t1": -1.0, "periodic": True},
        "build": {"validate": True},
    }
    cfg_path = tmp_path / "chain.json"
    cfg_path.write_text(json.dumps(cfg), encoding="utf-8")

    report = run_assembly(cfg_path)

    assert report["matrix"]["nnz"] == 8
    assert report["matrix"]["hamiltonian_nnz"] is None
    assert (tmp_path / "chain_run_blocks.json").exists()


def test_build_section_controls_value_dtype(tmp_path) -> None:
    cfg = {
        "run": {"name": "typed", "output_dir": str(tmp_path), "write_blocks": False},
        "model": {"kind": "square", "nx": 3, "ny": 3},
        "build": {"value_dtype": "float64", "index_dtype": "int64", "hamiltonian_dtype": "float64"},
    }
    cfg_path = tmp_path / "typed.json"
    cfg_path.write_text(json.dumps(cfg), encoding="utf-8")

    report = run_assembly(cfg_path)

    assert report["matrix"]["value_dtype"] == "float64"
    assert report["matrix"]["indptr_last"] == report["matrix"]["nnz"] == 12
    assert report["matrix"]["hamiltonian_is_hermitian"] is True
    assert "blocks" not in report["outputs"]
