"""Nostr key loading for badgebrotr.

Signing keys are needed only to publish (definitions, awards, profile
badges lists). Read views run with no keys at all, so keys are loaded on
demand by the commands that publish rather than at config validation.

Warning:
    Private keys must **never** be stored in configuration files, source code,
    or logged to any output. Always use environment variables or a secure
    secret management system.

Examples:
    ```python
    import os

    os.environ["PRIVATE_KEY"] = "nsec1..."  # pragma: allowlist secret
    keys = load_keys_from_env("PRIVATE_KEY")
    keys.public_key().to_hex()
    ```
"""

from __future__ import annotations

import os

from nostr_sdk import Keys


ENV_PRIVATE_KEY = "PRIVATE_KEY"  # pragma: allowlist secret  # Default env var name


def load_keys_from_env(env_var: str = ENV_PRIVATE_KEY) -> Keys:
    """Load Nostr keys from an environment variable.

    Args:
        env_var: Name of the environment variable holding the private key
            (nsec1 bech32 or 64-char hex).

    Returns:
        A ``nostr_sdk.Keys`` instance ready for signing.

    Raises:
        ValueError: If the variable is unset or empty.
        nostr_sdk.NostrSdkError: If the key value is malformed.
    """
    value = os.getenv(env_var)

    if not value:
        raise ValueError(
            f"{env_var} environment variable is required to publish. "
            "Generate one with: openssl rand -hex 32"
        )

    return Keys.parse(value)
