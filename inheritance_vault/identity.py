"""
Account identities and key management
"""

import hashlib
import hmac
from dataclasses import dataclass
from typing import Tuple

from ecdsa import BadSignatureError, SECP256k1, SigningKey, VerifyingKey
from ecdsa.errors import MalformedPointError

U64_MAX = (1 << 64) - 1


@dataclass(frozen=True)
class AccountId:
    """Opaque 128-bit principal identifier, split into prefix and suffix"""
    prefix: int
    suffix: int

    def __post_init__(self):
        for name in ("prefix", "suffix"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"AccountId {name} must be an int")
            if not (0 <= value <= U64_MAX):
                raise ValueError(f"AccountId {name} out of u64 range: {value}")

    def to_bytes(self) -> bytes:
        """Fixed-width 16 byte encoding (prefix || suffix, big endian)"""
        return self.prefix.to_bytes(8, 'big') + self.suffix.to_bytes(8, 'big')

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()

    @classmethod
    def from_bytes(cls, data: bytes) -> 'AccountId':
        if len(data) != 16:
            raise ValueError(f"AccountId must be 16 bytes, got {len(data)}")
        return cls(int.from_bytes(data[:8], 'big'), int.from_bytes(data[8:], 'big'))

    @classmethod
    def from_hex(cls, value: str) -> 'AccountId':
        if value.startswith("0x"):
            value = value[2:]
        return cls.from_bytes(bytes.fromhex(value))

    @classmethod
    def from_public_key(cls, public_key_hex: str) -> 'AccountId':
        """Derive an account id from a compressed public key"""
        digest = hashlib.sha256(b"INHERITANCE_VAULT_ACCOUNT_V1" + bytes.fromhex(public_key_hex)).digest()
        return cls.from_bytes(digest[:16])

    def __str__(self) -> str:
        return self.to_hex()


def identities_equal(a: AccountId, b: AccountId) -> bool:
    """Exact equality over both components; never a partial match"""
    if not isinstance(a, AccountId) or not isinstance(b, AccountId):
        return False
    return hmac.compare_digest(a.to_bytes(), b.to_bytes())


class AccountKey:
    """secp256k1 key pair controlling one account"""

    def __init__(self, private_key: bytes = None):
        if private_key:
            self.private_key = SigningKey.from_string(private_key, curve=SECP256k1)
        else:
            self.private_key = SigningKey.generate(curve=SECP256k1)

        self.public_key = self.private_key.get_verifying_key()

    @property
    def account_id(self) -> AccountId:
        return AccountId.from_public_key(self.get_public_key_hex())

    def get_public_key_hex(self) -> str:
        """Get compressed public key in hex format"""
        return self.public_key.to_string("compressed").hex()

    def get_private_key_hex(self) -> str:
        return self.private_key.to_string().hex()

    def sign_message(self, message: bytes) -> str:
        """Sign message and return signature in hex"""
        return self.private_key.sign_deterministic(message, hashfunc=hashlib.sha256).hex()

    @staticmethod
    def verify_signature(message: bytes, signature_hex: str, pubkey_hex: str) -> bool:
        """Verify signature against message and compressed public key"""
        try:
            vk = VerifyingKey.from_string(bytes.fromhex(pubkey_hex), curve=SECP256k1)
            return vk.verify(bytes.fromhex(signature_hex), message, hashfunc=hashlib.sha256)
        except (BadSignatureError, MalformedPointError, ValueError):
            return False

    @staticmethod
    def generate_key_pair() -> Tuple[str, str]:
        """Generate new key pair and return (private_key_hex, public_key_hex)"""
        key = AccountKey()
        return key.get_private_key_hex(), key.get_public_key_hex()
