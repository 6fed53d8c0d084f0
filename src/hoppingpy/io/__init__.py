from hoppingpy.io.formats import read_json_blocks, read_npz_blocks, write_json_blocks, write_npz_blocks
from hoppingpy.io.registry import get_format, list_formats, read_blocks, register_format, write_blocks


register_format("npz", read_npz_blocks, write_npz_blocks)
register_format("json", read_json_blocks, write_json_blocks)

__all__ = [
    "register_format",
    "get_format",
    "list_formats",
    "read_blocks",
    "write_blocks",
    "read_npz_blocks",
    "write_npz_blocks",
    "read_json_blocks",
    "write_json_blocks",
]
