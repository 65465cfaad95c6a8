import hashlib
import logging
import secrets
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from .errors import MalformedParameters
from .identity import AccountId
from .rules import check_clock

logger = logging.getLogger(__name__)

# Largest amount a single fungible asset record may carry
MAX_AMOUNT = (1 << 63) - (1 << 31)

PARAMETER_ARITY = 3
SERIAL_SIZE = 32

# Commitment to the dispatch logic every vault is locked with
SCRIPT_ROOT = hashlib.sha256(b"INHERITANCE_VAULT_SCRIPT_V1").digest()


@dataclass(frozen=True)
class FungibleAsset:
    """Amount of a fungible token, identified by its issuing faucet"""
    faucet_id: AccountId
    amount: int

    def __post_init__(self):
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError("Asset amount must be an integer")
        if not (0 < self.amount <= MAX_AMOUNT):
            raise ValueError(f"Asset amount must be between 1 and {MAX_AMOUNT}, got {self.amount}")

    def to_bytes(self) -> bytes:
        return self.faucet_id.to_bytes() + self.amount.to_bytes(8, 'big')

    def to_dict(self) -> dict:
        return {'faucet_id': self.faucet_id.to_hex(), 'amount': self.amount}

    @classmethod
    def from_dict(cls, data: dict) -> 'FungibleAsset':
        return cls(AccountId.from_hex(data['faucet_id']), data['amount'])


@dataclass(frozen=True)
class VaultParameters:
    """Decoded view of the parameter list attached to a vault"""
    deadline: int
    beneficiary_id: AccountId

    def encode(self) -> Tuple[int, int, int]:
        """Ordered parameter list: [deadline, beneficiary suffix, beneficiary prefix]"""
        return (self.deadline, self.beneficiary_id.suffix, self.beneficiary_id.prefix)

    @classmethod
    def decode(cls, inputs: Sequence[int]) -> 'VaultParameters':
        if len(inputs) != PARAMETER_ARITY:
            raise MalformedParameters(
                f"Expected {PARAMETER_ARITY} vault parameters, got {len(inputs)}",
                data={'arity': len(inputs)}
            )
        deadline, suffix, prefix = inputs
        try:
            return cls(check_clock(deadline, "deadline"), AccountId(prefix=prefix, suffix=suffix))
        except (TypeError, ValueError) as e:
            raise MalformedParameters(f"Invalid vault parameter: {e}") from e


@dataclass(frozen=True)
class VaultInstance:
    """One live lockup of assets for a beneficiary; never mutated once created"""
    assets: Tuple[FungibleAsset, ...]
    creator_id: AccountId
    inputs: Tuple[int, ...]
    serial: bytes

    def __post_init__(self):
        # normalise sequences so the instance stays hashable and immutable
        object.__setattr__(self, 'assets', tuple(self.assets))
        object.__setattr__(self, 'inputs', tuple(self.inputs))
        if not self.assets:
            raise ValueError("A vault must hold at least one asset")
        if len(self.serial) != SERIAL_SIZE:
            raise ValueError(f"Serial must be {SERIAL_SIZE} bytes")

    @property
    def parameters(self) -> VaultParameters:
        return VaultParameters.decode(self.inputs)

    @property
    def beneficiary_id(self) -> AccountId:
        return self.parameters.beneficiary_id

    @property
    def deadline(self) -> int:
        return self.parameters.deadline

    def _inputs_bytes(self) -> bytes:
        out = len(self.inputs).to_bytes(1, 'big')
        for value in self.inputs:
            out += int(value).to_bytes(8, 'big')
        return out

    def asset_commitment(self) -> bytes:
        hasher = hashlib.sha256()
        for asset in self.assets:
            hasher.update(asset.to_bytes())
        return hasher.digest()

    def recipient_digest(self) -> bytes:
        """Commitment to serial, script and parameters"""
        hasher = hashlib.sha256()
        hasher.update(b"VAULT_RECIPIENT_V1")
        hasher.update(self.serial)
        hasher.update(SCRIPT_ROOT)
        hasher.update(self._inputs_bytes())
        return hasher.digest()

    @property
    def vault_id(self) -> str:
        """Public identifier of this instance"""
        hasher = hashlib.sha256()
        hasher.update(self.recipient_digest())
        hasher.update(self.asset_commitment())
        return hasher.hexdigest()

    @property
    def nullifier(self) -> str:
        """Marker recorded by the ledger when the instance is consumed"""
        hasher = hashlib.sha256()
        hasher.update(b"VAULT_NULLIFIER_V1")
        hasher.update(self.serial)
        hasher.update(SCRIPT_ROOT)
        hasher.update(self._inputs_bytes())
        hasher.update(self.asset_commitment())
        return hasher.hexdigest()

    def total_amount(self, faucet_id: AccountId) -> int:
        return sum(a.amount for a in self.assets if a.faucet_id == faucet_id)

    def to_dict(self) -> dict:
        """Serialize vault to dictionary"""
        return {
            'vault_id': self.vault_id,
            'assets': [a.to_dict() for a in self.assets],
            'creator_id': self.creator_id.to_hex(),
            'inputs': list(self.inputs),
            'serial': self.serial.hex(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'VaultInstance':
        """Deserialize vault from dictionary"""
        return cls(
            assets=tuple(FungibleAsset.from_dict(a) for a in data['assets']),
            creator_id=AccountId.from_hex(data['creator_id']),
            inputs=tuple(data['inputs']),
            serial=bytes.fromhex(data['serial']),
        )


def create_vault(assets: Iterable[FungibleAsset], creator_id: AccountId,
                 beneficiary_id: AccountId, deadline: int,
                 serial: Optional[bytes] = None) -> VaultInstance:
    """Lock assets for a beneficiary behind a deadline, under a fresh serial"""
    check_clock(deadline, "deadline")
    if serial is None:
        serial = secrets.token_bytes(SERIAL_SIZE)

    vault = VaultInstance(
        assets=tuple(assets),
        creator_id=creator_id,
        inputs=VaultParameters(deadline, beneficiary_id).encode(),
        serial=serial,
    )
    logger.debug("Created vault %s for beneficiary %s, deadline %d",
                 vault.vault_id, beneficiary_id, deadline)
    return vault
