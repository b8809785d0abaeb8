# Input validation helpers
import re

from errors import validation_error

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

NICKNAME_MAX_LENGTH = 50
BIO_MAX_LENGTH = 500
COMMENT_MAX_LENGTH = 500
PASSWORD_MIN_LENGTH = 8


def normalize_email(email):
    return email.strip().lower()


def validate_email(email):
    """Basic format check, applied to the normalized address."""
    if not email or not isinstance(email, str):
        return False
    return EMAIL_RE.match(normalize_email(email)) is not None


def validate_password(password):
    """Return an error message for a weak password, or None when it is acceptable."""
    if not password or not isinstance(password, str):
        return "Password is required"
    if len(password) < PASSWORD_MIN_LENGTH:
        return f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
    return None


def clean_optional(value):
    """Trim a string, collapsing empty results to None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise validation_error("Expected a string value")
    value = value.strip()
    return value or None


def require_text(value, message):
    cleaned = clean_optional(value)
    if cleaned is None:
        raise validation_error(message)
    return cleaned


def check_length(value, limit, label):
    if value is not None and len(value) > limit:
        raise validation_error(f"{label} must be {limit} characters or less")
    return value


def validate_beers_count(beers_count, minimum, maximum):
    # bool is an int subclass but never a beer count
    if isinstance(beers_count, bool) or not isinstance(beers_count, int):
        raise validation_error("Beer count must be a whole number")
    if beers_count < minimum or beers_count > maximum:
        raise validation_error(f"Beer count must be between {minimum} and {maximum}")
    return beers_count


def validate_limit(limit, default, maximum):
    if limit is None:
        return default
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise validation_error("Limit must be a whole number")
    if limit < 1 or limit > maximum:
        raise validation_error(f"Limit must be between 1 and {maximum}")
    return limit


def validate_id(value, label):
    if isinstance(value, bool) or not isinstance(value, int):
        raise validation_error(f"{label} must be a whole number")
    return value
