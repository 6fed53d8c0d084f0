from .json_blocks import read_json_blocks, write_json_blocks
from .npz import read_npz_blocks, write_npz_blocks

__all__ = ["read_json_blocks", "write_json_blocks", "read_npz_blocks", "write_npz_blocks"]
