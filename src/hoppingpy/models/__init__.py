from .chain import ChainParams, chain_band_energies, chain_model
from .square import SquareLatticeParams, square_lattice_model

__all__ = [
    "ChainParams",
    "chain_model",
    "chain_band_energies",
    "SquareLatticeParams",
    "square_lattice_model",
]
