"""
Identifier Utilities
====================
Validation, normalization and display masking for email and phone identifiers.
"""

import re

EMAIL_PATTERN = re.compile(r'^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$', re.IGNORECASE)

_PHONE_STRIP = re.compile(r'[^\d+]')
_INTL_DIGITS = re.compile(r'^\d{7,15}$')
_LOCAL_DIGITS = re.compile(r'^\d{10,15}$')


def is_valid_email(text: str) -> bool:
    """
    Check for a ``local@domain.tld`` shaped address.

    Args:
        text: Raw or normalized input

    Returns:
        True if the trimmed input looks like an email address
    """
    return bool(EMAIL_PATTERN.match(text.strip()))


def is_valid_phone(text: str) -> bool:
    """
    Check for an E.164-like or 10+ digit local phone number.

    Formatting characters (spaces, dashes, parentheses) are ignored.

    Args:
        text: Raw or normalized input

    Returns:
        True if the remaining digits form a plausible phone number
    """
    digits = _PHONE_STRIP.sub('', text)
    if digits.startswith('+'):
        return bool(_INTL_DIGITS.match(digits[1:]))
    return bool(_LOCAL_DIGITS.match(digits))


def normalize_identifier(raw: str) -> str:
    """
    Normalize a raw identifier into its canonical session key.

    Emails are lower-cased; anything else is reduced to digits
    (keeping a leading ``+`` for E.164 numbers).

    Args:
        raw: Identifier as typed by the user

    Returns:
        Normalized identifier
    """
    value = raw.strip()
    if is_valid_email(value):
        return value.lower()
    return _PHONE_STRIP.sub('', value)


def is_valid_identifier(identifier: str) -> bool:
    """True if the identifier is a plausible email or phone number."""
    return is_valid_email(identifier) or is_valid_phone(identifier)


def mask_identifier(identifier: str) -> str:
    """
    Mask an identifier for safe display and logging.

    Examples:
        ``foo@bar.com`` -> ``f*o@bar.com``
        ``+15555555555`` -> ``*******5555``
    """
    if is_valid_email(identifier):
        name, domain = identifier.split('@', 1)
        if len(name) <= 2:
            masked_name = f"{name[:1]}*"
        else:
            masked_name = f"{name[0]}{'*' * (len(name) - 2)}{name[-1]}"
        return f"{masked_name}@{domain}"

    digits = re.sub(r'\D', '', identifier)
    if len(digits) <= 4:
        return f"****{digits}"
    return f"{'*' * (len(digits) - 4)}{digits[-4:]}"
