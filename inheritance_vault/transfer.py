"""
Asset transfer - releases a vault's assets to one destination
"""

import logging
from typing import List

from .errors import LedgerError, TransferError
from .identity import AccountId
from .vault import FungibleAsset, VaultInstance

logger = logging.getLogger(__name__)


def release_assets(vault: VaultInstance, destination: AccountId, ledger) -> List[FungibleAsset]:
    """
    Credit every asset in the vault to destination, all or nothing.

    ``ledger`` provides ``credit(destination, asset)`` and a ``transaction()``
    context manager that undoes the credits made inside it when it exits with
    an error. Assets are credited in their stored order.
    """
    released: List[FungibleAsset] = []
    index = 0
    try:
        with ledger.transaction():
            for index, asset in enumerate(vault.assets):
                ledger.credit(destination, asset)
                logger.debug("Credited %d of faucet %s to %s",
                             asset.amount, asset.faucet_id, destination)
                released.append(asset)
    except (LedgerError, ValueError) as e:
        failed = vault.assets[index]
        logger.warning("Release of vault %s rolled back at asset %d: %s",
                       vault.vault_id, index, e)
        raise TransferError(
            f"Credit of asset {index} to {destination} failed: {e}",
            data={'index': index, 'asset': failed.to_dict()}
        ) from e

    return released
