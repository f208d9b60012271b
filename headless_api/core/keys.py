import secrets
import string

ALPHABET = string.ascii_letters + string.digits


def generate_key(length: int) -> str:
    """Random [A-Za-z0-9] string of exactly `length` characters from the OS CSPRNG.

    Used for service ids, API keys, session tokens and reset passwords.
    Uniqueness is enforced by the storage layer, not here.
    """
    if length <= 0:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(ALPHABET) for _ in range(length))
