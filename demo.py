#!/usr/bin/env python3
"""
Complete demo of the Inheritance Vault lifecycle
"""

import logging
import tempfile

from inheritance_vault.config import VaultConfig
from inheritance_vault.errors import TooEarly, WrongBeneficiary
from inheritance_vault.identity import AccountKey
from inheritance_vault.ledger import FilesystemKeyStore, Ledger, consume_message
from inheritance_vault.vault import FungibleAsset


def main():
    logging.basicConfig(level=logging.WARNING)
    config = VaultConfig.from_env()

    print("=" * 60)
    print("INHERITANCE VAULT - COMPLETE DEMO")
    print("=" * 60)
    print()

    ledger = Ledger()
    keystore = FilesystemKeyStore(tempfile.mkdtemp(prefix="vault-keystore-"),
                                  passphrase=config.keystore_passphrase)
    print(f"Connected to ledger, at block: {ledger.clock.sync_state().block_num}")
    print()

    # Step 1: accounts
    print("STEP 1: Creating accounts")
    print("-" * 40)
    owner_key, beneficiary_key, stranger_key = AccountKey(), AccountKey(), AccountKey()
    owner_id = ledger.create_account(owner_key.get_public_key_hex())
    beneficiary_id = ledger.create_account(beneficiary_key.get_public_key_hex())
    stranger_id = ledger.create_account(stranger_key.get_public_key_hex())
    for key in (owner_key, beneficiary_key, stranger_key):
        keystore.add_key(key)
    print(f"Owner's account ID:       {owner_id}")
    print(f"Beneficiary's account ID: {beneficiary_id}")
    print(f"Stranger's account ID:    {stranger_id}")
    print()

    # Step 2: faucet and minting
    print("STEP 2: Deploying faucet and minting tokens for owner")
    print("-" * 40)
    faucet_key = AccountKey()
    faucet_id = ledger.create_faucet(
        faucet_key.get_public_key_hex(),
        symbol=config.token_symbol,
        decimals=config.token_decimals,
        max_supply=config.token_max_supply
    )
    ledger.mint(faucet_id, owner_id, config.mint_amount)
    print(f"Faucet account ID: {faucet_id}")
    print(f"Minted {config.mint_amount:,} {config.token_symbol} to owner")
    print()

    # Step 3: lock assets
    print("STEP 3: Locking assets in a vault")
    print("-" * 40)
    deadline = config.deadline_from(ledger.clock.sync_state().block_num)
    vault = ledger.lock_assets(
        owner_id,
        [FungibleAsset(faucet_id, config.lock_amount)],
        beneficiary_id,
        deadline
    )
    print(f"Deadline: block {deadline}")
    print(f"Vault ID: {vault.vault_id}")
    print(f"Locked:   {config.lock_amount} {config.token_symbol}")
    print()

    # Step 4: rejected attempts
    print("STEP 4: Attempts before the deadline")
    print("-" * 40)
    message = consume_message(vault.vault_id)
    for name, key in (("Beneficiary", beneficiary_key), ("Stranger", stranger_key)):
        try:
            ledger.consume_vault(vault.vault_id, key.account_id, key.sign_message(message))
        except (TooEarly, WrongBeneficiary) as e:
            print(f"{name}: rejected ({e.code})")
    print()

    # Step 5: proof of life
    print("STEP 5: Owner extends the deadline")
    print("-" * 40)
    owner_key = keystore.get_key(owner_id)
    new_deadline = config.deadline_from(ledger.clock.current_clock())
    vault = ledger.extend_deadline(vault.vault_id, owner_id,
                                   owner_key.sign_message(message), new_deadline)
    print(f"New vault ID: {vault.vault_id}")
    print(f"New deadline: block {new_deadline}")
    print()

    # Step 6: wait for the deadline and claim
    print("STEP 6: Consuming vault as beneficiary")
    print("-" * 40)
    height = ledger.clock.advance(config.deadline_offset_blocks)
    print(f"Advanced to block {height}")
    beneficiary_key = keystore.get_key(beneficiary_id)
    release = ledger.consume_vault(
        vault.vault_id,
        beneficiary_id,
        beneficiary_key.sign_message(consume_message(vault.vault_id))
    )
    print(f"Released via {release.path.value} at block {release.block_num}")
    print(f"Beneficiary balance: {ledger.balance_of(beneficiary_id, faucet_id)} {config.token_symbol}")
    print(f"Owner balance:       {ledger.balance_of(owner_id, faucet_id):,} {config.token_symbol}")
    print()
    print("Demo complete")


if __name__ == "__main__":
    main()
