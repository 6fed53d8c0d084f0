from .assembly import assemble_hopping_blocks
from .hamiltonian_builder import build_hamiltonian, family_energies

__all__ = ["assemble_hopping_blocks", "build_hamiltonian", "family_energies"]
