"""
Claim verification - decides whether a beneficiary may take the vault now
"""

import logging
from dataclasses import dataclass

from .errors import TooEarly, WrongBeneficiary
from .identity import AccountId, identities_equal
from .rules import blocks_remaining, check_clock, has_deadline_passed
from .vault import VaultInstance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClaimContext:
    """Who is consuming the vault, and when"""
    claimant_id: AccountId
    current_clock: int

    def __post_init__(self):
        check_clock(self.current_clock, "current_clock")


@dataclass(frozen=True)
class Authorization:
    """Permission for exactly one release of a vault to a destination"""
    destination: AccountId
    vault_id: str


class ClaimVerifier:
    """Authorizes beneficiary claims against the vault's stored parameters"""

    def verify(self, ctx: ClaimContext, vault: VaultInstance) -> Authorization:
        """
        Identity is checked before the deadline, so a stranger claiming early
        always sees WrongBeneficiary.
        """
        params = vault.parameters

        if not identities_equal(ctx.claimant_id, params.beneficiary_id):
            logger.info("Claim on vault %s rejected: %s is not the beneficiary",
                        vault.vault_id, ctx.claimant_id)
            raise WrongBeneficiary(
                f"Account {ctx.claimant_id} is not the beneficiary of vault {vault.vault_id}"
            )

        if not has_deadline_passed(params.deadline, ctx.current_clock):
            remaining = blocks_remaining(params.deadline, ctx.current_clock)
            logger.info("Claim on vault %s rejected: %d blocks until deadline",
                        vault.vault_id, remaining)
            raise TooEarly(
                f"Deadline {params.deadline} not reached at block {ctx.current_clock}: "
                f"{remaining} blocks remaining",
                data={'deadline': params.deadline, 'current_clock': ctx.current_clock}
            )

        return Authorization(destination=ctx.claimant_id, vault_id=vault.vault_id)
