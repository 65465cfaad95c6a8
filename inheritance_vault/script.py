"""
Vault script - the entry point run when a vault is consumed

Routing is decided once, on whether the consumer created the vault:

    creator        -> RECLAIM  (release to the creator, no deadline check)
    anyone else    -> CLAIM    (beneficiary only, and only once the deadline is reached)

Reclaim is how an owner proves they are alive: they take the assets back and
lock them again under a new deadline.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .identity import AccountId, identities_equal
from .predicate import ClaimContext, ClaimVerifier
from .transfer import release_assets
from .vault import FungibleAsset, VaultInstance, VaultParameters

logger = logging.getLogger(__name__)


class DispatchPath(Enum):
    RECLAIM = "reclaim"
    CLAIM = "claim"


@dataclass(frozen=True)
class Release:
    """Terminal outcome of a successful dispatch"""
    vault_id: str
    path: DispatchPath
    destination: AccountId
    assets: Tuple[FungibleAsset, ...]
    block_num: int

    def to_dict(self) -> dict:
        return {
            'vault_id': self.vault_id,
            'path': self.path.value,
            'destination': self.destination.to_hex(),
            'assets': [a.to_dict() for a in self.assets],
            'block_num': self.block_num,
        }


def resolve_path(ctx: ClaimContext, creator_id: AccountId) -> DispatchPath:
    if identities_equal(ctx.claimant_id, creator_id):
        return DispatchPath.RECLAIM
    return DispatchPath.CLAIM


class VaultScript:
    """
    Dispatcher for one vault consumption.

    ``host`` supplies the ledger primitives (``credit``, ``transaction``) and,
    for the no-argument trigger, ``caller_identity()``, ``current_clock()``,
    ``instance_creator_identity(vault)`` and ``active_vault()``.
    """

    def __init__(self, host, verifier: Optional[ClaimVerifier] = None):
        self.host = host
        self.verifier = verifier or ClaimVerifier()

    def __call__(self) -> Release:
        vault = self.host.active_vault()
        ctx = ClaimContext(
            claimant_id=self.host.caller_identity(),
            current_clock=self.host.current_clock(),
        )
        return self.dispatch(ctx, vault, creator_id=self.host.instance_creator_identity(vault))

    def dispatch(self, ctx: ClaimContext, vault: VaultInstance,
                 creator_id: Optional[AccountId] = None) -> Release:
        """
        Release the vault to its creator or, once due, to its beneficiary.

        ``creator_id`` defaults to the creator recorded on the vault.
        """
        # arity is checked before any identity or clock comparison
        VaultParameters.decode(vault.inputs)

        if creator_id is None:
            creator_id = vault.creator_id
        path = resolve_path(ctx, creator_id)
        logger.debug("Vault %s consumed by %s at block %d via %s",
                     vault.vault_id, ctx.claimant_id, ctx.current_clock, path.value)

        if path is DispatchPath.RECLAIM:
            destination = ctx.claimant_id
        else:
            destination = self.verifier.verify(ctx, vault).destination

        released = release_assets(vault, destination, self.host)
        logger.info("Vault %s released to %s (%s)", vault.vault_id, destination, path.value)

        return Release(
            vault_id=vault.vault_id,
            path=path,
            destination=destination,
            assets=tuple(released),
            block_num=ctx.current_clock,
        )
