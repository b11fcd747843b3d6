"""Accumulate converted definitions into one OpenAPI 3.1 document.

:class:`DocumentAssembler` is the single owner of the document state for a
build. The pipeline merges every dispatch result into it, in order, and
calls :meth:`DocumentAssembler.finalize` once at the end. Merges never delete:
a later schema or operation under an existing key replaces the earlier one
(last write wins) and is counted as a collision when the values differ.

The fixed parts of the document (``info``, ``servers`` and the Bearer
security scheme) are module constants, deep-copied into each finalized
document so that callers cannot mutate them.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from atproto_openapi.exceptions import AssemblerFinalizedError
from atproto_openapi.models import (
    BuildStats,
    DispatchResult,
    HTTPMethod,
    NoEntry,
    PathEntry,
    SchemaEntry,
)

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.1.0"

INFO: dict[str, str] = {
    "title": "AT Protocol XRPC API",
    "summary": "Conversion of AT Protocol's lexicons to OpenAPI's schema format.",
    "description": (
        "This section contains HTTP API reference docs for Bluesky and AT Protocol "
        "lexicons. Generate a bearer token to test API calls directly from the docs."
    ),
    # Living document, no versioning yet
    "version": "0.0.0",
}

SERVERS: list[dict[str, str]] = [
    {
        "url": "https://public.api.bsky.app/xrpc",
        "description": "Bluesky AppView (Public, No Auth)",
    },
    {
        "url": "https://pds.example.org/xrpc",
        "description": "Example atproto PDS (Authenticated)",
    },
    {
        "url": "https://bsky.network/xrpc",
        "description": "Bluesky Relay (Public, No Auth)",
    },
]

SECURITY_SCHEMES: dict[str, dict[str, str]] = {
    "Bearer": {"type": "http", "scheme": "bearer"},
}


class DocumentAssembler:
    """Builder for the generated OpenAPI document.

    Example::

        assembler = DocumentAssembler()
        assembler.record_tag("app.bsky.feed")
        assembler.merge_schema("app.bsky.feed.defs.postView", {"type": "object"})
        document = assembler.finalize()

    Attributes:
        stats: Counters updated by every merge.
    """

    def __init__(self) -> None:
        self._paths: dict[str, dict[str, Any]] = {}
        self._schemas: dict[str, dict[str, Any]] = {}
        # dict as an insertion-ordered set
        self._tags: dict[str, None] = {}
        self._finalized = False
        self.stats = BuildStats()

    @property
    def tags(self) -> list[str]:
        """Tags recorded so far, in first-seen order."""
        return list(self._tags)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def record_tag(self, tag: str) -> None:
        """Add *tag* to the document's tag list; repeats are ignored."""
        self._check_open()
        self._tags.setdefault(tag, None)

    def merge_schema(self, identifier: str, value: dict[str, Any]) -> None:
        """Store *value* under ``components.schemas[identifier]``."""
        self._check_open()
        previous = self._schemas.get(identifier)
        if previous is not None and previous != value:
            self._collision(f"schema {identifier}")
        self._schemas[identifier] = value
        self.stats.schemas += 1

    def merge_path(self, path_key: str, method: HTTPMethod, value: dict[str, Any]) -> None:
        """Store *value* as the operation for *path_key*.

        The path item is replaced as a whole, so a path holds exactly the
        operation merged last.
        """
        self._check_open()
        previous = self._paths.get(path_key)
        if previous is not None and previous != {method.value: value}:
            self._collision(f"path {path_key}")
        self._paths[path_key] = {method.value: value}
        self.stats.operations += 1

    def merge(self, result: DispatchResult) -> None:
        """Fold a dispatch result into the document."""
        if isinstance(result, SchemaEntry):
            self.merge_schema(result.identifier, result.value)
        elif isinstance(result, PathEntry):
            self.merge_path(result.path_key, result.method, result.value)
        elif isinstance(result, NoEntry):
            self._check_open()
            logger.debug("dropping %s: %s", result.identifier, result.reason)
            self.stats.dropped.append(result.identifier)
        else:
            raise TypeError(f"Unsupported dispatch result: {result!r}")

    def record_skip(self, identifier: str, reason: str) -> None:
        """Note a definition the publication filter excluded."""
        self._check_open()
        logger.debug("skipping %s: %s", identifier, reason)
        self.stats.skipped.append(identifier)

    def finalize(self) -> dict[str, Any]:
        """Return the complete OpenAPI document and close the assembler.

        Raises:
            AssemblerFinalizedError: If called more than once.
        """
        self._check_open()
        self._finalized = True
        return {
            "openapi": OPENAPI_VERSION,
            "info": copy.deepcopy(INFO),
            "servers": copy.deepcopy(SERVERS),
            "paths": self._paths,
            "components": {
                "schemas": self._schemas,
                "securitySchemes": copy.deepcopy(SECURITY_SCHEMES),
            },
            "tags": [{"name": name} for name in self._tags],
        }

    def _check_open(self) -> None:
        if self._finalized:
            raise AssemblerFinalizedError("Document has already been finalized")

    def _collision(self, what: str) -> None:
        self.stats.collisions += 1
        logger.warning("%s redefined; keeping the later definition", what)
