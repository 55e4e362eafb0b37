import secrets
import string


# Letters and digits; codes are case-sensitive
CHARSET = string.ascii_letters + string.digits  # a-zA-Z0-9

# Characters a user may put in a custom code
CUSTOM_CODE_CHARSET = frozenset(CHARSET + "-_")

MIN_CODE_LENGTH = 3
MAX_CODE_LENGTH = 64

# Path segments already taken by the API and the frontend
RESERVED_CODES = frozenset([
    "links", "metrics", "health", "static",
    "docs", "redoc",
])


def generate_short_code(length: int = 6) -> str:
    """
    Generate a random short code.

    Args:
        length: Length of the code (6 to 8 characters)

    Returns:
        A random code drawn from CHARSET

    Note:
        Uniqueness is not checked here. The links table enforces it and a
        collision is reported exactly like a duplicate custom code.
        - 6 chars: 62^6 = 56,800,235,584 combinations
    """
    return "".join(secrets.choice(CHARSET) for _ in range(length))


def validate_custom_code(code: str) -> tuple[bool, str]:
    """
    Validate a user-supplied short code.

    Args:
        code: The custom code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not code:
        return False, "Code cannot be empty"

    if len(code) < MIN_CODE_LENGTH:
        return False, f"Code must be at least {MIN_CODE_LENGTH} characters"

    if len(code) > MAX_CODE_LENGTH:
        return False, f"Code must be at most {MAX_CODE_LENGTH} characters"

    if not all(c in CUSTOM_CODE_CHARSET for c in code):
        return False, "Code can only contain letters, digits, hyphens and underscores"

    if code.lower() in RESERVED_CODES:
        return False, f"'{code}' is a reserved word and cannot be used"

    return True, ""
