"""
Symmetric encryption of document content.

Blob layout, before transport encoding:

    IV (16 bytes) || AES-256-CBC ciphertext (PKCS#7 padded)

The whole blob is base64 encoded so it can be written as text.

There is no authentication tag. A wrong key or a corrupted blob is detected
only when the padding (or, for text, UTF-8 decoding) happens to fail.
"""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Optional, Union

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes
from Crypto.Util.Padding import pad, unpad

from .config import AES_BLOCK_SIZE, AES_IV_SIZE, AES_KEY_SIZE
from .errors import CryptoError, FormatError, InvalidKeyError

logger = logging.getLogger(__name__)

KeyMaterial = Union[str, bytes]


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


def decode_key(key: KeyMaterial) -> bytes:
    """
    Decode base64 key material into raw AES key bytes.

    Raises:
        InvalidKeyError: if the key is not base64 or has the wrong size
    """

    try:
        raw = base64.b64decode(key.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidKeyError("Key is not valid base64") from e

    if len(raw) != AES_KEY_SIZE:
        raise InvalidKeyError(
            f"Key must decode to {AES_KEY_SIZE} bytes, got {len(raw)}"
        )

    return raw


def generate_key() -> str:
    """Return fresh random key material, base64 encoded."""
    return base64.b64encode(get_random_bytes(AES_KEY_SIZE)).decode("ascii")


def load_or_generate_key(key_file: Optional[Path] = None) -> str:
    """
    Read the key stored in ``key_file``, or generate a new one.

    A missing or empty key file means a new key. The stored key is used
    as-is; it is validated when it is first used for encryption.
    """

    if key_file is not None and key_file.is_file():
        stored = key_file.read_text(encoding="utf-8").strip()
        if stored:
            logger.info("Loaded key from: %s", key_file)
            return stored

    return generate_key()


def save_key(key_file: Path, key: str) -> bool:
    """Write ``key`` to ``key_file`` unless the file already holds a key."""

    if key_file.is_file() and key_file.read_text(encoding="utf-8").strip():
        return False

    key_file.parent.mkdir(parents=True, exist_ok=True)
    key_file.write_text(key + "\n", encoding="utf-8")
    logger.info("Saved key to: %s", key_file)
    return True


# ---------------------------------------------------------------------------
# Cipher
# ---------------------------------------------------------------------------


class CipherEngine:
    # ------------------------------------------------------------------
    # Bytes API
    # ------------------------------------------------------------------

    def encrypt(self, plaintext: bytes, key: KeyMaterial) -> str:
        """
        Encrypt ``plaintext`` under a fresh random IV.

        Returns:
            str: base64 of IV || ciphertext
        """

        raw_key = decode_key(key)
        iv = get_random_bytes(AES_IV_SIZE)
        cipher = AES.new(raw_key, AES.MODE_CBC, iv=iv)
        ciphertext = cipher.encrypt(pad(plaintext, AES_BLOCK_SIZE))
        return base64.b64encode(iv + ciphertext).decode("ascii")

    def decrypt(self, blob: KeyMaterial, key: KeyMaterial) -> bytes:
        """
        Decrypt a blob produced by :meth:`encrypt`.

        Raises:
            InvalidKeyError: if the key is malformed
            FormatError: if the blob is not base64 or shorter than one IV
            CryptoError: if decryption or unpadding fails
        """

        raw_key = decode_key(key)

        try:
            data = base64.b64decode(blob.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise FormatError("Encrypted content is not valid base64") from e

        if len(data) < AES_IV_SIZE:
            raise FormatError(
                f"Encrypted content is {len(data)} bytes, "
                f"shorter than the {AES_IV_SIZE}-byte IV"
            )

        iv, ciphertext = data[:AES_IV_SIZE], data[AES_IV_SIZE:]
        if not ciphertext:
            raise CryptoError("Decryption failed: no ciphertext after the IV")

        cipher = AES.new(raw_key, AES.MODE_CBC, iv=iv)

        try:
            return unpad(cipher.decrypt(ciphertext), AES_BLOCK_SIZE)
        except ValueError as e:
            raise CryptoError(f"Decryption failed: {e}") from e

    # ------------------------------------------------------------------
    # Text API
    # ------------------------------------------------------------------

    def encrypt_text(self, text: str, key: KeyMaterial) -> str:
        return self.encrypt(text.encode("utf-8"), key)

    def decrypt_text(self, blob: KeyMaterial, key: KeyMaterial) -> str:
        plaintext = self.decrypt(blob, key)
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CryptoError(
                "Decrypted content is not valid UTF-8 (wrong key?)"
            ) from e
