"""Derive global identifiers and tags from lexicon ids.

Every definition in the generated document is addressed by an *identifier*:
the document's NSID for its ``main`` definition and ``"{nsid}.{name}"`` for
any other. Identifiers double as ``components.schemas`` keys, so lexicon
``ref`` strings are mapped onto the same namespace by
:func:`ref_to_identifier`.

All functions here are pure.
"""

from __future__ import annotations

from typing import Any

MAIN_DEF = "main"

_TAG_SEGMENTS = 3
_SCHEMA_REF_PREFIX = "#/components/schemas/"


def identifier_for(document_id: str, def_name: str) -> str:
    """Return the document-global identifier of a definition.

    Example::

        identifier_for("com.example.foo", "main")   # "com.example.foo"
        identifier_for("com.example.foo", "input")  # "com.example.foo.input"
    """
    if def_name == MAIN_DEF:
        return document_id
    return f"{document_id}.{def_name}"


def calculate_tag(document_id: str) -> str:
    """Return the grouping tag for a lexicon id.

    The tag is the NSID's authority plus its first name segment, e.g.
    ``app.bsky.feed.getTimeline`` is tagged ``app.bsky.feed``. Shorter ids are
    their own tag.
    """
    return ".".join(document_id.split(".")[:_TAG_SEGMENTS])


tag_for = calculate_tag


def ref_to_identifier(document_id: str, ref: str) -> str:
    """Resolve a lexicon ``ref`` string to the identifier it points at.

    Handles local refs (``#name``), fully-qualified refs (``nsid#name``) and
    bare NSIDs, which point at the target's ``main`` definition.

    Args:
        document_id: Id of the lexicon the ref appears in.
        ref: The raw ref value.

    Returns:
        The identifier used as a ``components.schemas`` key.
    """
    nsid, _, name = ref.partition("#")
    if not nsid:
        nsid = document_id
    return identifier_for(nsid, name or MAIN_DEF)


def schema_ref(identifier: str) -> dict[str, Any]:
    """Return a JSON Schema ``$ref`` pointing at a component schema."""
    return {"$ref": f"{_SCHEMA_REF_PREFIX}{identifier}"}
