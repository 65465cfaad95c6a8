"""
Inheritance Vault - deadline-gated custody with owner proof-of-life
"""

from .errors import (
    ClaimError,
    DispatchError,
    MalformedParameters,
    TooEarly,
    TransferError,
    VaultError,
    WrongBeneficiary,
)
from .identity import AccountId, AccountKey, identities_equal
from .predicate import Authorization, ClaimContext, ClaimVerifier
from .rules import has_deadline_passed
from .script import DispatchPath, Release, VaultScript
from .transfer import release_assets
from .vault import FungibleAsset, VaultInstance, VaultParameters, create_vault

__version__ = "0.1.0"
__all__ = [
    "AccountId",
    "AccountKey",
    "identities_equal",
    "has_deadline_passed",
    "FungibleAsset",
    "VaultInstance",
    "VaultParameters",
    "create_vault",
    "ClaimContext",
    "Authorization",
    "ClaimVerifier",
    "release_assets",
    "DispatchPath",
    "Release",
    "VaultScript",
    "VaultError",
    "DispatchError",
    "MalformedParameters",
    "ClaimError",
    "WrongBeneficiary",
    "TooEarly",
    "TransferError"
]
