"""
Execution host - what a vault script can see while it runs
"""

from typing import TYPE_CHECKING

from ..identity import AccountId
from ..vault import FungibleAsset, VaultInstance

if TYPE_CHECKING:
    from .state import Ledger


class ExecutionHost:
    """Binds one consumer and one vault to the ledger for a single execution"""

    def __init__(self, ledger: 'Ledger', caller_id: AccountId, vault: VaultInstance):
        self._ledger = ledger
        self._caller_id = caller_id
        self._vault = vault

    def current_clock(self) -> int:
        return self._ledger.clock.current_clock()

    def caller_identity(self) -> AccountId:
        return self._caller_id

    def instance_creator_identity(self, vault: VaultInstance) -> AccountId:
        return vault.creator_id

    def active_vault(self) -> VaultInstance:
        return self._vault

    def credit(self, destination: AccountId, asset: FungibleAsset) -> None:
        self._ledger.credit(destination, asset)

    def transaction(self):
        return self._ledger.transaction()
