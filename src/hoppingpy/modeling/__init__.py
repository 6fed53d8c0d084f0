from .builders import assemble_hopping_blocks, build_hamiltonian, family_energies
from .schema import BuildConfig, HoppingFamily
from .validators import find_duplicate_hoppings, validate_families, validate_hopping_blocks

__all__ = [
    "HoppingFamily",
    "BuildConfig",
    "assemble_hopping_blocks",
    "build_hamiltonian",
    "family_energies",
    "find_duplicate_hoppings",
    "validate_hopping_blocks",
    "validate_families",
]
