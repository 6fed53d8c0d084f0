from .block import CooBlock
from .csr import blocks_to_coo, blocks_to_csr, csr_to_blocks, flatten_blocks
from .hopping_blocks import HoppingBlocks
from .types import DEFAULT_INDEX_DTYPE, HoppingModel

__all__ = [
    "CooBlock",
    "HoppingBlocks",
    "HoppingModel",
    "DEFAULT_INDEX_DTYPE",
    "flatten_blocks",
    "blocks_to_coo",
    "blocks_to_csr",
    "csr_to_blocks",
]
