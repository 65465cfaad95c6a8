#!/usr/bin/env python3
"""
Web interface for the Inheritance Vault
"""

from flask import Flask, request, jsonify
import os
import sys

# Add project root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from inheritance_vault.config import VaultConfig
from inheritance_vault.errors import UnknownAccount, UnknownVault, VaultError
from inheritance_vault.identity import AccountId, AccountKey
from inheritance_vault.ledger import Ledger, consume_message
from inheritance_vault.rules import blocks_remaining
from inheritance_vault.vault import FungibleAsset

app = Flask(__name__)
config = VaultConfig.from_env()

# Global storage (in production, keys stay with their owners)
ledger = Ledger()
account_keys = {}  # account id hex -> AccountKey
account_names = {}  # account id hex -> display name


def reset_state():
    """Start over with an empty ledger"""
    global ledger
    ledger = Ledger()
    account_keys.clear()
    account_names.clear()


def _error(e: Exception):
    if isinstance(e, (UnknownAccount, UnknownVault)):
        return jsonify({'success': False, 'error': str(e), 'code': e.code}), 404
    if isinstance(e, VaultError):
        app.logger.info("Request rejected: %s", e)
        return jsonify({'success': False, 'error': str(e), 'code': e.code}), 400
    return jsonify({'success': False, 'error': str(e)}), 400


def _key_for(account_hex: str) -> AccountKey:
    account_id = AccountId.from_hex(account_hex)
    key = account_keys.get(account_id.to_hex())
    if key is None:
        raise UnknownAccount(f"No key held for account {account_id}")
    return key


def _vault_info(vault) -> dict:
    info = vault.to_dict()
    info['beneficiary_id'] = vault.beneficiary_id.to_hex()
    info['deadline'] = vault.deadline
    info['blocks_remaining'] = blocks_remaining(vault.deadline, ledger.clock.current_clock())
    return info


@app.route('/')
def index():
    """Service summary"""
    return jsonify({
        'service': 'inheritance-vault',
        'block_num': ledger.clock.current_clock(),
        'live_vaults': len(ledger.live_vaults())
    })


@app.route('/api/accounts', methods=['POST'])
def create_account():
    """Create a new account with a fresh key pair"""
    data = request.json or {}
    key = AccountKey()
    try:
        account_id = ledger.create_account(key.get_public_key_hex())
    except (VaultError, ValueError) as e:
        return _error(e)

    account_keys[account_id.to_hex()] = key
    account_names[account_id.to_hex()] = data.get('name', account_id.to_hex())
    app.logger.info("Created account %s (%s)", account_id, account_names[account_id.to_hex()])

    return jsonify({
        'success': True,
        'account_id': account_id.to_hex(),
        'name': account_names[account_id.to_hex()],
        'public_key': key.get_public_key_hex()
    })


@app.route('/api/faucets', methods=['POST'])
def create_faucet():
    """Deploy a fungible faucet"""
    data = request.json or {}
    key = AccountKey()
    try:
        faucet_id = ledger.create_faucet(
            key.get_public_key_hex(),
            symbol=data.get('symbol', config.token_symbol),
            decimals=data.get('decimals', config.token_decimals),
            max_supply=data.get('max_supply', config.token_max_supply)
        )
    except (VaultError, ValueError) as e:
        return _error(e)

    account_keys[faucet_id.to_hex()] = key
    return jsonify({'success': True, 'faucet_id': faucet_id.to_hex()})


@app.route('/api/accounts/<account_id>/mint', methods=['POST'])
def mint(account_id):
    """Mint tokens from a faucet to an account"""
    data = request.json or {}
    try:
        asset = ledger.mint(
            AccountId.from_hex(data['faucet_id']),
            AccountId.from_hex(account_id),
            data.get('amount', config.mint_amount)
        )
    except (VaultError, ValueError, KeyError) as e:
        return _error(e)

    return jsonify({'success': True, 'asset': asset.to_dict()})


@app.route('/api/accounts/<account_id>/balance')
def get_balance(account_id):
    faucet_hex = request.args.get('faucet_id')
    if faucet_hex is None:
        return jsonify({'success': False, 'error': 'faucet_id is required'}), 400
    try:
        balance = ledger.balance_of(AccountId.from_hex(account_id), AccountId.from_hex(faucet_hex))
    except ValueError as e:
        return _error(e)
    return jsonify({'account_id': account_id, 'faucet_id': faucet_hex, 'balance': balance})


@app.route('/api/vaults', methods=['POST'])
def create_vault():
    """Lock owner assets for a beneficiary"""
    data = request.json or {}
    try:
        owner_id = AccountId.from_hex(data['owner'])
        beneficiary_id = AccountId.from_hex(data['beneficiary'])
        asset = FungibleAsset(AccountId.from_hex(data['faucet_id']), data.get('amount', config.lock_amount))
        deadline = data.get('deadline')
        if deadline is None:
            deadline = config.deadline_from(ledger.clock.current_clock())

        vault = ledger.lock_assets(owner_id, [asset], beneficiary_id, deadline)
    except (VaultError, ValueError, KeyError) as e:
        return _error(e)

    return jsonify({'success': True, 'vault': _vault_info(vault)})


@app.route('/api/vaults/<vault_id>')
def get_vault(vault_id):
    """Get vault information"""
    release = ledger.get_release(vault_id)
    if release is not None:
        return jsonify({'vault_id': vault_id, 'consumed': True, 'release': release.to_dict()})
    try:
        vault = ledger.get_vault(vault_id)
    except VaultError as e:
        return _error(e)
    return jsonify({'consumed': False, 'vault': _vault_info(vault)})


@app.route('/api/vaults/<vault_id>/consume', methods=['POST'])
def consume_vault(vault_id):
    """Consume a vault as the given caller"""
    data = request.json or {}
    try:
        key = _key_for(data['caller'])
        signature = key.sign_message(consume_message(vault_id))
        release = ledger.consume_vault(vault_id, key.account_id, signature)
    except (VaultError, ValueError, KeyError) as e:
        return _error(e)

    return jsonify({'success': True, 'release': release.to_dict()})


@app.route('/api/vaults/<vault_id>/extend', methods=['POST'])
def extend_vault(vault_id):
    """Owner proof-of-life: reclaim and relock with a new deadline"""
    data = request.json or {}
    try:
        key = _key_for(data['owner'])
        deadline = data.get('deadline')
        if deadline is None:
            deadline = config.deadline_from(ledger.clock.current_clock())
        signature = key.sign_message(consume_message(vault_id))
        vault = ledger.extend_deadline(vault_id, key.account_id, signature, deadline)
    except (VaultError, ValueError, KeyError) as e:
        return _error(e)

    return jsonify({'success': True, 'previous_vault_id': vault_id, 'vault': _vault_info(vault)})


@app.route('/api/chain')
def get_chain():
    return jsonify({'block_num': ledger.clock.sync_state().block_num})


@app.route('/api/chain/advance', methods=['POST'])
def advance_chain():
    data = request.json or {}
    try:
        height = ledger.clock.advance(data.get('blocks', 1))
    except ValueError as e:
        return _error(e)
    return jsonify({'success': True, 'block_num': height})


if __name__ == "__main__":
    app.run(
        host="0.0.0.0",
        port=config.http_port,
        debug=False
    )
