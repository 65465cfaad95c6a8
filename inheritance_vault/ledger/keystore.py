"""
Filesystem key store for account keys
"""

import base64
import logging
import os
from typing import List, Optional

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from ecdsa import SigningKey

from ..identity import AccountId, AccountKey

logger = logging.getLogger(__name__)

SALT_SIZE = 16
KDF_ITERATIONS = 390_000


class KeyStoreError(Exception):
    pass


def _derive_fernet(passphrase: str, salt: bytes) -> Fernet:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=KDF_ITERATIONS,
    )
    return Fernet(base64.urlsafe_b64encode(kdf.derive(passphrase.encode())))


class FilesystemKeyStore:
    """
    One PEM file per account, named after the account id.

    With a passphrase, each file holds a random salt followed by a Fernet
    token of the PEM.
    """

    def __init__(self, directory: str, passphrase: Optional[str] = None):
        self.directory = directory
        self.passphrase = passphrase
        os.makedirs(directory, exist_ok=True)

    def _path(self, account_id: AccountId) -> str:
        return os.path.join(self.directory, account_id.to_bytes().hex() + ".pem")

    def add_key(self, key: AccountKey) -> AccountId:
        account_id = key.account_id
        data = key.private_key.to_pem()
        if self.passphrase is not None:
            salt = os.urandom(SALT_SIZE)
            data = salt + _derive_fernet(self.passphrase, salt).encrypt(data)

        with open(self._path(account_id), 'wb') as f:
            f.write(data)
        logger.debug("Stored key for account %s", account_id)
        return account_id

    def get_key(self, account_id: AccountId) -> AccountKey:
        path = self._path(account_id)
        if not os.path.exists(path):
            raise KeyStoreError(f"No key stored for account {account_id}")

        with open(path, 'rb') as f:
            data = f.read()
        if self.passphrase is not None:
            salt, token = data[:SALT_SIZE], data[SALT_SIZE:]
            try:
                data = _derive_fernet(self.passphrase, salt).decrypt(token)
            except InvalidToken:
                raise KeyStoreError(f"Cannot decrypt key for account {account_id}") from None

        signing_key = SigningKey.from_pem(data)
        return AccountKey(signing_key.to_string())

    def list_account_ids(self) -> List[AccountId]:
        ids = []
        for name in sorted(os.listdir(self.directory)):
            if name.endswith(".pem"):
                ids.append(AccountId.from_bytes(bytes.fromhex(name[:-4])))
        return ids
