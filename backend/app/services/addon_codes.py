"""
Legacy and alias add-on codes mapped to their catalog codes.

Older clients post add-ons under names that predate the current catalog.
Both pricing and job/add-on linkage resolve codes through this table.
"""

ADDON_ALIASES = {
    "boost": "highlighted",
    "visibility-boost": "highlighted",
    "highlight": "highlighted",
    "social-boost": "social-media-promotion",
    "email-blast": "social-media-promotion",
    "extended": "top-of-search",
}

# Adds extra days to a listing's expiry instead of mapping to a catalog row.
EXTEND_POST_ADDON = "extend-post"


def normalize_addon_code(code: str) -> str:
    return ADDON_ALIASES.get(code, code)


def normalize_addon_codes(codes: list[str]) -> list[str]:
    """Normalize a list of codes, dropping duplicates but keeping first-seen order."""
    seen: dict[str, None] = {}
    for code in codes:
        seen.setdefault(normalize_addon_code(code), None)
    return list(seen)
