#!/usr/bin/env python3
"""
Example: Who can consume a vault, and when
"""

from inheritance_vault.errors import VaultError
from inheritance_vault.identity import AccountKey
from inheritance_vault.predicate import ClaimContext
from inheritance_vault.script import VaultScript
from inheritance_vault.ledger import Ledger
from inheritance_vault.vault import FungibleAsset, VaultInstance, create_vault


def main():
    print("=== Inheritance Vault Claim Scenarios ===")
    print()

    ledger = Ledger()
    alice, bob, carol = AccountKey(), AccountKey(), AccountKey()
    for key in (alice, bob, carol):
        ledger.create_account(key.get_public_key_hex())
    faucet_id = ledger.create_faucet(AccountKey().get_public_key_hex(), "X", 0, 1_000)

    vault = create_vault([FungibleAsset(faucet_id, 100)], alice.account_id, bob.account_id, 1000)
    malformed = VaultInstance(vault.assets, alice.account_id, vault.inputs[:2], vault.serial)

    scenarios = [
        ("A: Bob at block 999", bob, 999, vault),
        ("B: Bob at block 1000", bob, 1000, vault),
        ("C: Alice at block 500", alice, 500, vault),
        ("D: Carol at block 1000", carol, 1000, vault),
        ("E: two parameters", bob, 1000, malformed),
    ]

    for label, key, clock, target in scenarios:
        # dry runs: undo each release so every scenario starts from the same state
        script = VaultScript(ledger)
        try:
            with ledger.transaction():
                release = script.dispatch(ClaimContext(key.account_id, clock), target)
                print(f"   {label}: released {release.assets[0].amount} to {release.path.value} destination")
                raise _DryRun()
        except _DryRun:
            pass
        except VaultError as e:
            print(f"   {label}: {e.code}")


class _DryRun(Exception):
    pass


if __name__ == "__main__":
    main()
