import os
from dataclasses import dataclass, fields, replace
from typing import Optional


@dataclass(frozen=True)
class VaultConfig:
    """Settings for running an inheritance vault network"""

    # Deadline is placed this many blocks after the current height
    deadline_offset_blocks: int

    # Faucet issuing the locked token
    token_symbol: str
    token_decimals: int
    token_max_supply: int

    # Owner funding and lockup
    mint_amount: int
    lock_amount: int

    keystore_dir: str
    keystore_passphrase: Optional[str]
    http_port: int

    @classmethod
    def local(cls) -> 'VaultConfig':
        """Short deadlines for a local development ledger"""
        return cls(
            deadline_offset_blocks=3,
            token_symbol="INH",
            token_decimals=8,
            token_max_supply=1_000_000,
            mint_amount=1_000_000,
            lock_amount=10,
            keystore_dir="./keystore",
            keystore_passphrase=None,
            http_port=10000
        )

    @classmethod
    def testnet(cls) -> 'VaultConfig':
        """Longer deadlines and a separate key directory for a shared network"""
        return replace(
            cls.local(),
            deadline_offset_blocks=4320,  # ~1 day at 20s blocks
            keystore_dir="./keystore-testnet",
        )

    @classmethod
    def from_env(cls, base: Optional['VaultConfig'] = None, prefix: str = "VAULT_") -> 'VaultConfig':
        """Override fields from environment variables, e.g. VAULT_LOCK_AMOUNT=25"""
        config = base or cls.local()
        overrides = {}
        for f in fields(cls):
            raw = os.environ.get(prefix + f.name.upper())
            if raw is None:
                continue
            if f.type is int:
                overrides[f.name] = int(raw)
            else:
                overrides[f.name] = raw
        if "PORT" in os.environ and "http_port" not in overrides:
            overrides["http_port"] = int(os.environ["PORT"])
        return replace(config, **overrides)

    def deadline_from(self, block_num: int) -> int:
        return block_num + self.deadline_offset_blocks
