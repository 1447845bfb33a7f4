"""
Rewrites CDN mirror URLs to the canonical host before they are requested.
"""

from khinsider_cli.models.config import DEFAULT_CANONICAL_PREFIX, DEFAULT_MIRROR_PREFIX


def rewrite_mirror_url(
    url: str,
    mirror_prefix: str = DEFAULT_MIRROR_PREFIX,
    canonical_prefix: str = DEFAULT_CANONICAL_PREFIX,
) -> str:
    """
    Swaps a leading mirror host for the canonical one.
    URLs on any other host are returned unchanged.
    """
    if url.startswith(mirror_prefix):
        return canonical_prefix + url[len(mirror_prefix) :]
    return url
