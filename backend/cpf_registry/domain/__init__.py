"""Domain layer.

Contains the user registry business logic without framework dependencies:
- cpf: CPF checksum algorithm
- user_validator: Field-level validation rules
- eligibility: Credit eligibility rule
- ports: UserStore and IdGenerator interfaces
- user: User aggregate and the UserDetails fetch result
"""

from .cpf import CpfValidator
from .eligibility import compute_credit_eligibility
from .ports import IdGenerator, UserStore
from .user import User, UserDetails
from .user_validator import UserValidator

__all__ = [
    "CpfValidator",
    "compute_credit_eligibility",
    "IdGenerator",
    "UserStore",
    "User",
    "UserDetails",
    "UserValidator",
]
