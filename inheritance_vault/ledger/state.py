"""
In-memory ledger: accounts, faucets, holdings and the live vault registry
"""

import logging
import re
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..errors import (
    InsufficientBalance,
    InvalidSignature,
    LedgerError,
    NotVaultOwner,
    SupplyExceeded,
    UnknownAccount,
    UnknownVault,
    VaultAlreadyConsumed,
)
from ..identity import AccountId, AccountKey, identities_equal
from ..rules import check_clock
from ..script import Release, VaultScript
from ..vault import MAX_AMOUNT, FungibleAsset, VaultInstance, create_vault
from .chain import BlockClock
from .host import ExecutionHost

logger = logging.getLogger(__name__)

MAX_DECIMALS = 12
_SYMBOL_RE = re.compile(r"^[A-Z]{1,6}$")


class AccountKind(Enum):
    BASIC = "basic"
    FUNGIBLE_FAUCET = "fungible_faucet"


@dataclass
class AccountRecord:
    account_id: AccountId
    public_key: str
    kind: AccountKind


@dataclass
class FaucetRecord:
    faucet_id: AccountId
    symbol: str
    decimals: int
    max_supply: int
    issued: int = 0


def consume_message(vault_id: str) -> bytes:
    """Message a consumer signs to authorize consuming a vault"""
    return b"CONSUME_VAULT_V1" + bytes.fromhex(vault_id)


class Ledger:
    """
    Account holdings plus the set of live and consumed vaults.

    Every state change happens under one re-entrant lock; ``transaction()``
    restores holdings and the vault registry if the enclosed block raises.
    """

    def __init__(self, clock: Optional[BlockClock] = None):
        self.clock = clock or BlockClock()
        self._lock = threading.RLock()
        self._accounts: Dict[AccountId, AccountRecord] = {}
        self._faucets: Dict[AccountId, FaucetRecord] = {}
        self._holdings: Dict[AccountId, Dict[AccountId, int]] = {}
        self._vaults: Dict[str, VaultInstance] = {}
        self._nullifiers: Dict[str, str] = {}
        self._releases: Dict[str, Release] = {}

    # ------------------------------------------------------------------
    # Accounts and faucets
    # ------------------------------------------------------------------

    def _register(self, public_key_hex: str, kind: AccountKind) -> AccountId:
        account_id = AccountId.from_public_key(public_key_hex)
        with self._lock:
            if account_id in self._accounts:
                raise ValueError(f"Account {account_id} already exists")
            self._accounts[account_id] = AccountRecord(account_id, public_key_hex, kind)
            self._holdings[account_id] = {}
        logger.info("Registered %s account %s", kind.value, account_id)
        return account_id

    def create_account(self, public_key_hex: str) -> AccountId:
        return self._register(public_key_hex, AccountKind.BASIC)

    def create_faucet(self, public_key_hex: str, symbol: str, decimals: int, max_supply: int) -> AccountId:
        """Deploy a fungible faucet issuing at most ``max_supply`` units"""
        if not _SYMBOL_RE.match(symbol):
            raise ValueError(f"Token symbol must be 1-6 uppercase letters, got {symbol!r}")
        if not (0 <= decimals <= MAX_DECIMALS):
            raise ValueError(f"Decimals must be between 0 and {MAX_DECIMALS}")
        if not (0 < max_supply <= MAX_AMOUNT):
            raise ValueError(f"Max supply must be between 1 and {MAX_AMOUNT}")

        faucet_id = self._register(public_key_hex, AccountKind.FUNGIBLE_FAUCET)
        with self._lock:
            self._faucets[faucet_id] = FaucetRecord(faucet_id, symbol, decimals, max_supply)
        return faucet_id

    def get_account(self, account_id: AccountId) -> AccountRecord:
        try:
            return self._accounts[account_id]
        except KeyError:
            raise UnknownAccount(f"Account {account_id} not found") from None

    def get_faucet(self, faucet_id: AccountId) -> FaucetRecord:
        try:
            return self._faucets[faucet_id]
        except KeyError:
            raise UnknownAccount(f"Faucet {faucet_id} not found") from None

    def mint(self, faucet_id: AccountId, account_id: AccountId, amount: int) -> FungibleAsset:
        """Issue new units from a faucet to an account"""
        asset = FungibleAsset(faucet_id, amount)
        with self.transaction():
            faucet = self.get_faucet(faucet_id)
            if faucet.issued + amount > faucet.max_supply:
                raise SupplyExceeded(
                    f"Minting {amount} would exceed max supply {faucet.max_supply} "
                    f"({faucet.issued} issued)"
                )
            self.credit(account_id, asset)
            faucet.issued += amount
        logger.info("Minted %d %s to %s", amount, faucet.symbol, account_id)
        return asset

    # ------------------------------------------------------------------
    # Holdings
    # ------------------------------------------------------------------

    def balance_of(self, account_id: AccountId, faucet_id: AccountId) -> int:
        return self._holdings.get(account_id, {}).get(faucet_id, 0)

    def credit(self, destination: AccountId, asset: FungibleAsset) -> None:
        """Add one asset record to an account; atomic per call"""
        with self._lock:
            self.get_account(destination)
            self.get_faucet(asset.faucet_id)
            holdings = self._holdings[destination]
            new_balance = holdings.get(asset.faucet_id, 0) + asset.amount
            if new_balance > MAX_AMOUNT:
                raise LedgerError(f"Balance of {destination} would exceed {MAX_AMOUNT}")
            holdings[asset.faucet_id] = new_balance

    def debit(self, source: AccountId, asset: FungibleAsset) -> None:
        with self._lock:
            self.get_account(source)
            holdings = self._holdings[source]
            balance = holdings.get(asset.faucet_id, 0)
            if balance < asset.amount:
                raise InsufficientBalance(
                    f"Account {source} holds {balance} of {asset.faucet_id}, needs {asset.amount}"
                )
            holdings[asset.faucet_id] = balance - asset.amount

    @contextmanager
    def transaction(self):
        """Apply the enclosed state changes together or not at all"""
        with self._lock:
            holdings = {k: dict(v) for k, v in self._holdings.items()}
            issued = {k: f.issued for k, f in self._faucets.items()}
            vaults = dict(self._vaults)
            nullifiers = dict(self._nullifiers)
            releases = dict(self._releases)
            try:
                yield self
            except BaseException:
                self._holdings = holdings
                for faucet_id, value in issued.items():
                    self._faucets[faucet_id].issued = value
                self._vaults = vaults
                self._nullifiers = nullifiers
                self._releases = releases
                raise

    # ------------------------------------------------------------------
    # Vaults
    # ------------------------------------------------------------------

    def lock_assets(self, owner_id: AccountId, assets: Iterable[FungibleAsset],
                    beneficiary_id: AccountId, deadline: int,
                    serial: Optional[bytes] = None) -> VaultInstance:
        """Move assets out of the owner's account into a new vault"""
        with self.transaction():
            vault = create_vault(assets, owner_id, beneficiary_id, deadline, serial=serial)
            if vault.vault_id in self._vaults or vault.vault_id in self._releases:
                raise ValueError(f"Vault {vault.vault_id} already exists")
            for asset in vault.assets:
                self.debit(owner_id, asset)
            self._vaults[vault.vault_id] = vault
        logger.info("Vault %s locked by %s for %s until block %d",
                    vault.vault_id, owner_id, beneficiary_id, deadline)
        return vault

    def get_vault(self, vault_id: str) -> VaultInstance:
        with self._lock:
            if vault_id in self._releases:
                raise VaultAlreadyConsumed(f"Vault {vault_id} has already been consumed")
            try:
                return self._vaults[vault_id]
            except KeyError:
                raise UnknownVault(f"Vault {vault_id} not found") from None

    def is_consumed(self, vault_id: str) -> bool:
        return vault_id in self._releases

    def get_release(self, vault_id: str) -> Optional[Release]:
        return self._releases.get(vault_id)

    def live_vaults(self) -> List[VaultInstance]:
        with self._lock:
            return list(self._vaults.values())

    def _authenticate(self, caller_id: AccountId, message: bytes, signature: str) -> None:
        account = self.get_account(caller_id)
        if not AccountKey.verify_signature(message, signature, account.public_key):
            raise InvalidSignature(f"Signature does not match account {caller_id}")

    def consume_vault(self, vault_id: str, caller_id: AccountId, signature: str) -> Release:
        """
        Run the vault script on behalf of ``caller_id``.

        The vault is marked consumed only after the script released its
        assets; a rejected attempt leaves it live for later attempts.
        """
        with self._lock:
            vault = self.get_vault(vault_id)
            if vault.nullifier in self._nullifiers:
                raise VaultAlreadyConsumed(f"Vault {vault_id} has already been consumed")
            self._authenticate(caller_id, consume_message(vault_id), signature)

            release = VaultScript(ExecutionHost(self, caller_id, vault))()

            self._nullifiers[vault.nullifier] = vault_id
            self._releases[vault_id] = release
            del self._vaults[vault_id]

        logger.info("Vault %s consumed by %s at block %d",
                    vault_id, caller_id, release.block_num)
        return release

    def extend_deadline(self, vault_id: str, owner_id: AccountId, signature: str,
                        new_deadline: int, serial: Optional[bytes] = None) -> VaultInstance:
        """Reclaim a vault and lock the same assets again under a new deadline"""
        check_clock(new_deadline, "deadline")
        with self.transaction():
            vault = self.get_vault(vault_id)
            if not identities_equal(owner_id, vault.creator_id):
                raise NotVaultOwner(f"Only the creator of vault {vault_id} may extend it")
            if serial is not None and serial == vault.serial:
                raise ValueError(f"Renewal of vault {vault_id} needs a new serial")
            self.consume_vault(vault_id, owner_id, signature)
            renewed = self.lock_assets(owner_id, vault.assets, vault.beneficiary_id,
                                       new_deadline, serial=serial)
        logger.info("Vault %s renewed as %s with deadline %d",
                    vault_id, renewed.vault_id, new_deadline)
        return renewed
