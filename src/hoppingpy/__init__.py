from .core import CooBlock, HoppingBlocks, HoppingModel, blocks_to_csr, csr_to_blocks
from .modeling import BuildConfig, HoppingFamily, assemble_hopping_blocks, build_hamiltonian, validate_hopping_blocks
from .models import ChainParams, SquareLatticeParams, chain_model, square_lattice_model

__all__ = [
    "CooBlock",
    "HoppingBlocks",
    "HoppingModel",
    "blocks_to_csr",
    "csr_to_blocks",
    "BuildConfig",
    "HoppingFamily",
    "assemble_hopping_blocks",
    "build_hamiltonian",
    "validate_hopping_blocks",
    "ChainParams",
    "SquareLatticeParams",
    "chain_model",
    "square_lattice_model",
]
