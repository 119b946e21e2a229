"""Utility functions for filesystem operations.

Provides path component encoding helpers.
"""

import hashlib
from urllib.parse import quote

# Longest component returned verbatim; temp-file affixes must still fit NAME_MAX (255)
MAX_COMPONENT_LENGTH = 200

# Encoded prefix kept in front of the digest for long components
_DIGEST_PREFIX_LENGTH = MAX_COMPONENT_LENGTH - 64


def encode_path_component(component: str) -> str:
    """
    Encode a string as a single filesystem path component.

    Percent-encodes every character outside the unreserved set, so slashes
    never introduce nesting and two different inputs never produce the same
    component. Dot segments are encoded as well.

    Encodings longer than MAX_COMPONENT_LENGTH are shortened to a readable
    prefix plus the SHA-256 of the raw component. Shortened names are always
    MAX_COMPONENT_LENGTH + 1 characters long, so they never coincide with a
    verbatim encoding.

    Args:
        component: String to encode

    Returns:
        Filesystem-safe string of at most MAX_COMPONENT_LENGTH + 1 characters

    Raises:
        ValueError: If the component is empty

    Example:
        >>> encode_path_component("feature/login")
        'feature%2Flogin'
        >>> encode_path_component("node-modules-v1")
        'node-modules-v1'
        >>> encode_path_component("..")
        '%2E%2E'
        >>> len(encode_path_component("k" * 512))
        201
    """
    if not component:
        raise ValueError("Path component must not be empty")
    if component in (".", ".."):
        return component.replace(".", "%2E")

    encoded = quote(component, safe="")
    if len(encoded) <= MAX_COMPONENT_LENGTH:
        return encoded

    digest = hashlib.sha256(component.encode("utf-8")).hexdigest()
    return f"{encoded[:_DIGEST_PREFIX_LENGTH]}-{digest}"
