#!/usr/bin/env python3
"""
Example: Locking tokens in an inheritance vault
"""

import json

from inheritance_vault.config import VaultConfig
from inheritance_vault.identity import AccountKey
from inheritance_vault.ledger import Ledger
from inheritance_vault.vault import FungibleAsset, VaultInstance


def main():
    config = VaultConfig.local()
    ledger = Ledger()

    print("=== Creating Inheritance Vault ===")
    print()

    owner_key, beneficiary_key = AccountKey(), AccountKey()
    owner_id = ledger.create_account(owner_key.get_public_key_hex())
    beneficiary_id = ledger.create_account(beneficiary_key.get_public_key_hex())
    faucet_id = ledger.create_faucet(AccountKey().get_public_key_hex(), "INH", 8, 1_000_000)
    ledger.mint(faucet_id, owner_id, 1_000)

    print(f"   Owner:       {owner_id}")
    print(f"   Beneficiary: {beneficiary_id}")
    print()

    deadline = config.deadline_from(ledger.clock.current_clock())
    vault = ledger.lock_assets(owner_id, [FungibleAsset(faucet_id, 100)], beneficiary_id, deadline)

    print("Vault Created Successfully!")
    print(f"   Vault ID:  {vault.vault_id}")
    print(f"   Deadline:  block {vault.deadline}")
    print(f"   Owner balance left: {ledger.balance_of(owner_id, faucet_id)}")
    print()

    # Vaults travel as plain JSON between the parties
    encoded = json.dumps(vault.to_dict(), indent=2)
    print(encoded)
    restored = VaultInstance.from_dict(json.loads(encoded))
    assert restored.vault_id == vault.vault_id


if __name__ == "__main__":
    main()
