"""
Credentials Management
======================
Handles the encrypted token envelope and safe logging of tokens.

The OAuth layer may hand tokens to the client wrapped in a Fernet envelope
so the raw provider token never leaves the server in clear text. The
provider layer unwraps the envelope per request and never stores the
result.

To generate a new secret:
    from cryptography.fernet import Fernet
    print(Fernet.generate_key().decode())

Or use: generate_secret() from this module.
"""

from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from ..errors import ProviderAuthError


def generate_secret() -> str:
    """
    Generate a new Fernet key for token envelopes.

    Add the generated key to the environment as:
        COMPANION_SECRET="generated-key-here"

    Returns:
        Base64-encoded Fernet key string
    """
    return Fernet.generate_key().decode()


def _fernet(secret: str) -> Fernet:
    try:
        return Fernet(secret.encode())
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid token secret format: {e}")


def encrypt_token(token: str, secret: str) -> str:
    """
    Wrap a provider access token in a Fernet envelope.

    Args:
        token: Raw provider access token
        secret: Fernet key string

    Returns:
        Encrypted token string
    """
    return _fernet(secret).encrypt(token.encode()).decode()


def decrypt_token(value: str, secret: str) -> str:
    """
    Unwrap an encrypted token envelope.

    Args:
        value: Fernet-encrypted token string
        secret: Fernet key string

    Returns:
        Raw provider access token

    Raises:
        ProviderAuthError: If the envelope is not valid for this secret
        ValueError: If the secret itself is malformed
    """
    fernet = _fernet(secret)
    try:
        return fernet.decrypt(value.encode()).decode()
    except (InvalidToken, UnicodeError) as e:
        raise ProviderAuthError(f"Failed to decrypt access token: {type(e).__name__}")


def mask_token(token: Optional[str]) -> str:
    """
    Create a masked copy of a token for safe logging.

    Args:
        token: Token string (may be None)

    Returns:
        Masked token string
    """
    if not token:
        return "<none>"
    if len(token) > 8:
        return f"{token[:4]}...{token[-4:]}"
    return "***"
