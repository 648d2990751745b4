"""Exception types raised by the vault.

Every failure of an encrypt/decrypt operation is terminal: nothing is
retried and no partial output is returned.
"""


class CryptVaultError(Exception):
    """Base class for all vault errors."""


class RandomnessUnavailable(CryptVaultError):
    """The randomness provider could not supply an IV."""


class InvalidCiphertext(CryptVaultError, ValueError):
    """Ciphertext has the wrong length or shape to be decrypted."""


class InvalidPadding(CryptVaultError, ValueError):
    """Trailing block-size padding is inconsistent."""


class DecryptionFailed(CryptVaultError):
    """Wrong password or corrupted data.

    The two causes are deliberately reported as one error.
    """

    def __init__(self, message: str = "Decryption failed (wrong password or corrupt data)"):
        super().__init__(message)
