from cryptography.fernet import Fernet
import base64
import hashlib
from genie.config import ENCRYPTION_SECRET


def _get_cipher():
    if not ENCRYPTION_SECRET:
        raise RuntimeError("ENCRYPTION_SECRET is not set.")
    # Derive a 32-byte Fernet key from the configured secret
    key = hashlib.sha256(ENCRYPTION_SECRET.encode()).digest()
    return Fernet(base64.urlsafe_b64encode(key))


def encrypt_token(token: str) -> str:
    return _get_cipher().encrypt(token.encode()).decode()


def decrypt_token(token: str) -> str:
    return _get_cipher().decrypt(token.encode()).decode()


def fingerprint_token(token: str) -> str:
    """
    Stable lookup key for an encrypted token (Fernet output is non-deterministic).
    """
    return hashlib.sha256(f"{ENCRYPTION_SECRET}:{token}".encode()).hexdigest()
