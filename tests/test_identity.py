import unittest
from inheritance_vault.identity import AccountId, AccountKey, identities_equal


class TestAccountId(unittest.TestCase):

    def test_encoding(self):
        """Test fixed-width byte and hex encoding"""
        account_id = AccountId(prefix=0x0102030405060708, suffix=0x1112131415161718)
        self.assertEqual(account_id.to_bytes().hex(), "01020304050607081112131415161718")
        self.assertEqual(AccountId.from_hex(account_id.to_hex()), account_id)
        self.assertEqual(AccountId.from_bytes(account_id.to_bytes()), account_id)

    def test_component_range(self):
        """Test that components must be unsigned 64-bit integers"""
        with self.assertRaises(ValueError):
            AccountId(prefix=-1, suffix=0)
        with self.assertRaises(ValueError):
            AccountId(prefix=0, suffix=1 << 64)
        with self.assertRaises(TypeError):
            AccountId(prefix="1", suffix=0)
        with self.assertRaises(ValueError):
            AccountId.from_bytes(b"\x00" * 15)

    def test_derived_from_public_key(self):
        """Test that the same key always yields the same account"""
        key = AccountKey()
        self.assertEqual(key.account_id, AccountId.from_public_key(key.get_public_key_hex()))
        self.assertNotEqual(key.account_id, AccountKey().account_id)


class TestIdentityComparator(unittest.TestCase):

    def test_exact_match(self):
        a = AccountId(prefix=7, suffix=9)
        self.assertTrue(identities_equal(a, AccountId(prefix=7, suffix=9)))

    def test_both_components_must_match(self):
        """Test that matching prefix or suffix alone is never enough"""
        a = AccountId(prefix=7, suffix=9)
        self.assertFalse(identities_equal(a, AccountId(prefix=7, suffix=10)))
        self.assertFalse(identities_equal(a, AccountId(prefix=8, suffix=9)))
        self.assertFalse(identities_equal(a, AccountId(prefix=9, suffix=7)))

    def test_non_identities_never_equal(self):
        a = AccountId(prefix=7, suffix=9)
        self.assertFalse(identities_equal(a, None))
        self.assertFalse(identities_equal(a, a.to_bytes()))
        self.assertFalse(identities_equal((7, 9), (7, 9)))


class TestAccountKey(unittest.TestCase):

    def test_sign_and_verify(self):
        """Test signature verification against the signer's public key"""
        key = AccountKey()
        signature = key.sign_message(b"consume")
        self.assertTrue(AccountKey.verify_signature(b"consume", signature, key.get_public_key_hex()))
        self.assertFalse(AccountKey.verify_signature(b"other", signature, key.get_public_key_hex()))
        self.assertFalse(AccountKey.verify_signature(b"consume", signature, AccountKey().get_public_key_hex()))

    def test_malformed_inputs_do_not_verify(self):
        key = AccountKey()
        self.assertFalse(AccountKey.verify_signature(b"m", "zz", key.get_public_key_hex()))
        self.assertFalse(AccountKey.verify_signature(b"m", key.sign_message(b"m"), "02" + "00" * 10))

    def test_restore_from_private_key(self):
        private_hex, public_hex = AccountKey.generate_key_pair()
        restored = AccountKey(bytes.fromhex(private_hex))
        self.assertEqual(restored.get_public_key_hex(), public_hex)
        self.assertEqual(len(bytes.fromhex(public_hex)), 33)


if __name__ == '__main__':
    unittest.main()
