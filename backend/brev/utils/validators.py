from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from ..core.shortener import validate_custom_code
from ..schemas.link import LinkCreate

MAX_URL_LENGTH = 2048


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a request; ``field`` names the offending input"""
    ok: bool
    field: Optional[str] = None
    message: str = ""

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, field: str, message: str) -> "ValidationResult":
        return cls(ok=False, field=field, message=message)


def is_valid_url(url: str) -> tuple[bool, str]:
    """
    Validate that a URL is absolute and uses http or https.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not url.strip():
        return False, "URL cannot be empty"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL: {e}"

    # Must have scheme and netloc
    if not all([result.scheme, result.netloc]):
        return False, "Invalid URL format"

    # Only http and https
    if result.scheme.lower() not in ("http", "https"):
        return False, "Only HTTP and HTTPS URLs are allowed"

    return True, ""


def validate_link_create(link_data: LinkCreate) -> ValidationResult:
    """Check a create request before anything touches the store"""
    is_valid, error_msg = is_valid_url(link_data.url)
    if not is_valid:
        return ValidationResult.failure("url", error_msg)

    if link_data.code is not None:
        is_valid, error_msg = validate_custom_code(link_data.code)
        if not is_valid:
            return ValidationResult.failure("code", error_msg)

    return ValidationResult.success()
