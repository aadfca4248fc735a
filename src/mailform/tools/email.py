"""Email related tools."""

import math
from email.errors import HeaderParseError
from email.headerregistry import Address


def obfuscate_string(value: str | None) -> str:
    """Replace the first half of a string with asterisks."""
    if not value:
        return ""
    hidden = math.ceil(len(value) / 2)
    return "*" * hidden + value[hidden:]


def obfuscate_email(email: str | None) -> str:
    """
    Obfuscate an email address for logging.

    The local part and the domain name are obfuscated separately so the
    address keeps its shape, e.g. ``john@example.com`` gives ``**hn@******e.com``.
    Anything that does not parse as an address is obfuscated as a plain string.
    """
    try:
        address = Address(addr_spec=email)
    except (ValueError, AttributeError, IndexError, HeaderParseError):
        return obfuscate_string(email)
    if not address.username or not address.domain:
        return obfuscate_string(email)
    return f"{obfuscate_string(address.username)}@{obfuscate_string(address.domain)}"
