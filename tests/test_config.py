import os
import unittest
from unittest import mock
from inheritance_vault.config import VaultConfig


class TestVaultConfig(unittest.TestCase):

    def test_local_preset(self):
        """Test local defaults match the development network"""
        config = VaultConfig.local()
        self.assertEqual(config.deadline_offset_blocks, 3)
        self.assertEqual(config.token_symbol, "INH")
        self.assertEqual(config.token_decimals, 8)
        self.assertEqual(config.lock_amount, 10)
        self.assertIsNone(config.keystore_passphrase)

    def test_testnet_preset(self):
        config = VaultConfig.testnet()
        self.assertGreater(config.deadline_offset_blocks, VaultConfig.local().deadline_offset_blocks)
        self.assertEqual(config.token_symbol, "INH")

    def test_deadline_from(self):
        self.assertEqual(VaultConfig.local().deadline_from(100), 103)

    def test_environment_overrides(self):
        env = {'VAULT_LOCK_AMOUNT': '25', 'VAULT_TOKEN_SYMBOL': 'ABC', 'PORT': '8080'}
        with mock.patch.dict(os.environ, env, clear=True):
            config = VaultConfig.from_env()
        self.assertEqual(config.lock_amount, 25)
        self.assertEqual(config.token_symbol, 'ABC')
        self.assertEqual(config.http_port, 8080)
        self.assertEqual(config.deadline_offset_blocks, 3)

    def test_invalid_override(self):
        with mock.patch.dict(os.environ, {'VAULT_LOCK_AMOUNT': 'ten'}, clear=True):
            with self.assertRaises(ValueError):
                VaultConfig.from_env()


if __name__ == '__main__':
    unittest.main()
