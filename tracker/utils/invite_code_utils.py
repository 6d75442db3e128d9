import secrets

from tracker.constants.group import INVITE_CODE_ALPHABET, INVITE_CODE_LENGTH


def generate_invite_code() -> str:
    """
    Generate a random invite code.

    Returns:
        A 6-character code drawn uniformly from A-Z and 0-9
    """
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


def normalize_invite_code(code: str) -> str:
    """Invite codes are matched case-insensitively and stored uppercase."""
    return code.strip().upper()


def is_well_formed_invite_code(code: str) -> bool:
    return len(code) == INVITE_CODE_LENGTH and all(char in INVITE_CODE_ALPHABET for char in code)
