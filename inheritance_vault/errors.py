"""
Vault error taxonomy

Every failure carries a stable machine code so callers (HTTP layer, demo
scripts, transaction submitters) can react without parsing messages.

VaultError
 ├─ DispatchError            : a single dispatch attempt failed, vault stays live
 │   ├─ MalformedParameters  : stored parameter list has the wrong arity
 │   ├─ ClaimError
 │   │   ├─ WrongBeneficiary : claimant is neither creator nor beneficiary
 │   │   └─ TooEarly         : beneficiary claimed before the deadline
 │   └─ TransferError        : a ledger credit failed, release rolled back
 └─ LedgerError              : failures of the surrounding ledger
"""

from typing import Any, Dict, Optional


class VaultError(Exception):
    """Base error with a stable code"""

    code = "VAULT_ERROR"

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.data = data

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dict"""
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


class DispatchError(VaultError):
    code = "DISPATCH_FAILED"


class MalformedParameters(DispatchError):
    code = "MALFORMED_PARAMETERS"


class ClaimError(DispatchError):
    code = "CLAIM_REJECTED"


class WrongBeneficiary(ClaimError):
    code = "WRONG_BENEFICIARY"


class TooEarly(ClaimError):
    code = "TOO_EARLY"


class TransferError(DispatchError):
    """A credit failed part way through a release; nothing was credited"""

    code = "TRANSFER_FAILED"


class LedgerError(VaultError):
    code = "LEDGER_ERROR"


class UnknownAccount(LedgerError):
    code = "UNKNOWN_ACCOUNT"


class UnknownVault(LedgerError):
    code = "UNKNOWN_VAULT"


class VaultAlreadyConsumed(LedgerError):
    code = "VAULT_CONSUMED"


class InsufficientBalance(LedgerError):
    code = "INSUFFICIENT_BALANCE"


class SupplyExceeded(LedgerError):
    code = "SUPPLY_EXCEEDED"


class InvalidSignature(LedgerError):
    code = "INVALID_SIGNATURE"


class NotVaultOwner(LedgerError):
    code = "NOT_VAULT_OWNER"
