"""
Credential lookup.

Keys are read from the process environment every time headers are built,
so a rotated key is picked up and a missing key fails before any request
is sent.
"""

import os

from ..core.errors import MissingCredentials


def read_api_key(env_var: str) -> str:
    """Return the API key stored in ``env_var``.

    Raises:
        MissingCredentials: If the variable is unset or blank
    """
    value = os.environ.get(env_var, "").strip()
    if not value:
        raise MissingCredentials(env_var)
    return value
