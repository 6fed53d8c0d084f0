from .blocks_validator import find_duplicate_hoppings, validate_hopping_blocks
from .family_validator import validate_families

__all__ = ["find_duplicate_hoppings", "validate_hopping_blocks", "validate_families"]
