"""Decide which lexicon definitions belong in the public document.

Unspecced and temporary endpoints, and anything whose description opens
with "deprecated", are kept out of the published API reference. Matching is
case-insensitive and operates on the definition's global identifier, so a
single ``unspecced`` segment anywhere in the NSID excludes every definition
of that lexicon.
"""

from __future__ import annotations

from typing import Optional

from atproto_openapi.models import LexiconDefinition

_EXCLUDED_FRAGMENTS = ("unspecced", ".temp.")
_DEPRECATION_MARKER = "deprecated"


def exclusion_reason(identifier: str, definition: LexiconDefinition) -> Optional[str]:
    """Return why a definition is excluded, or ``None`` when it is publishable."""
    lowered = identifier.lower()
    for fragment in _EXCLUDED_FRAGMENTS:
        if fragment in lowered:
            return f"identifier contains {fragment!r}"

    description = definition.description
    if description is not None and description.lower().startswith(_DEPRECATION_MARKER):
        return "deprecated"
    return None


def is_publishable(identifier: str, definition: LexiconDefinition) -> bool:
    """Return ``True`` when the definition may appear in the public document."""
    return exclusion_reason(identifier, definition) is None
