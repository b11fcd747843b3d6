"""Lexicon input layer -- discover and load lexicon files, derive identifiers.

Typical usage::

    from atproto_openapi.lexicon import discover_lexicons, load_lexicon

    for path in discover_lexicons("lexicons"):
        doc = load_lexicon(path)

Sub-modules:

* :mod:`~atproto_openapi.lexicon.loader` -- I/O layer: recursive discovery
  of ``*.json`` files and validation of a single file into a
  :class:`~atproto_openapi.models.LexiconDocument`.
* :mod:`~atproto_openapi.lexicon.identifiers` -- Pure helpers mapping
  document ids, definition names and lexicon refs onto schema identifiers
  and tags.
"""

from atproto_openapi.lexicon.identifiers import (
    calculate_tag,
    identifier_for,
    ref_to_identifier,
    schema_ref,
    tag_for,
)
from atproto_openapi.lexicon.loader import discover_lexicons, load_lexicon

__all__ = [
    "calculate_tag",
    "discover_lexicons",
    "identifier_for",
    "load_lexicon",
    "ref_to_identifier",
    "schema_ref",
    "tag_for",
]
