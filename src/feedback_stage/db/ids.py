"""Identifier helpers for primary keys."""

import secrets


def generate_id(prefix: str) -> str:
    """Return a random identifier such as ``fb_3f9c0a1b2c4d5e6f``."""
    return f"{prefix}_{secrets.token_hex(8)}"
