"""Booth admin credentials and tokens.

Booth PINs are stored and compared as plain strings and admin tokens are
unsigned random hex values kept in process memory. This mirrors how the
festival runs its booths; it is not a hardened authentication scheme.
"""
import secrets
from typing import Optional

from boothops.core.constants import ADMIN_TOKEN_BYTES


def generate_admin_token() -> str:
    """Generate an unguessable random admin token (hex)."""
    return secrets.token_hex(ADMIN_TOKEN_BYTES)


def verify_booth_pin(password: Optional[str], stored_password: Optional[str]) -> bool:
    """Exact string comparison of a submitted PIN against the stored one."""
    if password is None or stored_password is None:
        return False
    return secrets.compare_digest(password.encode("utf-8"), stored_password.encode("utf-8"))


def is_superadmin_class(class_name: str, superadmin_class_name: str) -> bool:
    """True when the class name is the reserved super-admin identity."""
    return class_name == superadmin_class_name
