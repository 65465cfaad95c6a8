import typing
import unittest
from inheritance_vault.errors import ClaimError, TooEarly, WrongBeneficiary
from inheritance_vault.identity import AccountId
from inheritance_vault.predicate import Authorization, ClaimContext, ClaimVerifier
from inheritance_vault.ledger.host import ExecutionHost
from inheritance_vault.script import VaultScript
from inheritance_vault.transfer import release_assets
from inheritance_vault.vault import FungibleAsset, VaultInstance, create_vault


class TestClaimVerifier(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.alice = AccountId(prefix=1, suffix=11)
        self.bob = AccountId(prefix=2, suffix=22)
        self.carol = AccountId(prefix=3, suffix=33)
        faucet = AccountId(prefix=9, suffix=99)
        self.vault = create_vault([FungibleAsset(faucet, 100)], self.alice, self.bob, 1000)
        self.verifier = ClaimVerifier()

    def test_beneficiary_after_deadline(self):
        """Test authorization names the claimant as destination"""
        auth = self.verifier.verify(ClaimContext(self.bob, 1000), self.vault)
        self.assertIsInstance(auth, Authorization)
        self.assertEqual(auth.destination, self.bob)
        self.assertEqual(auth.vault_id, self.vault.vault_id)

    def test_beneficiary_before_deadline(self):
        with self.assertRaises(TooEarly) as ctx:
            self.verifier.verify(ClaimContext(self.bob, 999), self.vault)
        self.assertEqual(ctx.exception.code, "TOO_EARLY")
        self.assertEqual(ctx.exception.data, {'deadline': 1000, 'current_clock': 999})

    def test_identity_checked_before_deadline(self):
        """Test that a stranger claiming early sees WrongBeneficiary, not TooEarly"""
        for clock in (0, 999, 1000, 10_000):
            with self.assertRaises(WrongBeneficiary):
                self.verifier.verify(ClaimContext(self.carol, clock), self.vault)

    def test_creator_is_not_beneficiary(self):
        """Test that the verifier alone gives the creator no claim"""
        with self.assertRaises(WrongBeneficiary):
            self.verifier.verify(ClaimContext(self.alice, 5000), self.vault)

    def test_near_miss_identity(self):
        near = AccountId(prefix=self.bob.prefix, suffix=self.bob.suffix + 1)
        with self.assertRaises(ClaimError):
            self.verifier.verify(ClaimContext(near, 5000), self.vault)

    def test_context_clock_validation(self):
        with self.assertRaises(ValueError):
            ClaimContext(self.bob, -1)

    def test_vault_annotations_resolve(self):
        """Test that every vault-typed signature names the real VaultInstance"""
        for func in (ClaimVerifier.verify, release_assets, VaultScript.dispatch,
                     ExecutionHost.instance_creator_identity, ExecutionHost.active_vault):
            hints = typing.get_type_hints(func)
            vault_hint = hints.get('vault', hints.get('return'))
            self.assertIs(vault_hint, VaultInstance, func.__qualname__)


if __name__ == '__main__':
    unittest.main()
