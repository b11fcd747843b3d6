"""Canonical models shared across all atproto_openapi modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Lexicon input models** -- parsed from lexicon JSON files by
:func:`~atproto_openapi.lexicon.loader.load_lexicon`:
    :class:`LexiconDefinition` and :class:`LexiconDocument`.

**Dispatch results** -- produced by
:func:`~atproto_openapi.generator.dispatcher.dispatch` and consumed by the
:class:`~atproto_openapi.generator.assembler.DocumentAssembler`:
    :class:`SchemaEntry`, :class:`PathEntry`, and :class:`NoEntry`.

**Build configuration and reporting**:
    :class:`BuildConfig` and :class:`BuildStats`.

Lexicon models use ``extra="allow"`` so that type-specific fields (``properties``,
``parameters``, ``output``, ...) survive validation and stay reachable through
``model_extra`` for the converters.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Lexicon input ---


class DefinitionKind(str, enum.Enum):
    """The closed set of lexicon definition types the dispatcher understands."""

    ARRAY = "array"
    OBJECT = "object"
    PROCEDURE = "procedure"
    QUERY = "query"
    RECORD = "record"
    STRING = "string"
    SUBSCRIPTION = "subscription"
    TOKEN = "token"


class LexiconDefinition(BaseModel):
    """One named definition inside a lexicon's ``defs`` map.

    Only ``type`` and ``description`` are modelled explicitly. ``type`` is
    accepted as any JSON value, or left out: an unrecognised or missing type
    must survive loading so that unpublished definitions are never checked,
    and the dispatcher rejects it for the rest.

    Example::

        LexiconDefinition.model_validate(
            {"type": "query", "parameters": {"type": "params", "properties": {}}}
        )
    """

    model_config = ConfigDict(extra="allow")

    type: Any = None
    description: Optional[str] = None

    def get(self, name: str, default: Any = None) -> Any:  # noqa: ANN401
        """Return a type-specific field such as ``properties`` or ``output``."""
        return (self.model_extra or {}).get(name, default)


class LexiconDocument(BaseModel):
    """A single parsed lexicon file.

    ``defs`` keeps the order in which definitions appear in the file, which
    decides last-write-wins resolution between definitions of the same file.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(min_length=1, description="NSID, e.g. app.bsky.feed.getTimeline")
    defs: dict[str, LexiconDefinition] = Field(min_length=1)
    lexicon: Optional[int] = None
    description: Optional[str] = None
    revision: Optional[int] = None


# --- Dispatch results ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods an XRPC operation can be exposed under."""

    GET = "get"
    POST = "post"


@dataclass(frozen=True)
class SchemaEntry:
    """A converted data definition, stored under ``components.schemas``."""

    identifier: str
    value: dict[str, Any]


@dataclass(frozen=True)
class PathEntry:
    """A converted query or procedure, stored under ``paths``."""

    path_key: str
    method: HTTPMethod
    value: dict[str, Any]


@dataclass(frozen=True)
class NoEntry:
    """A definition that was dispatched but contributes nothing to the document."""

    identifier: str
    reason: str


DispatchResult = Union[SchemaEntry, PathEntry, NoEntry]


# --- Build configuration ---


class OutputFileFormat(str, enum.Enum):
    """Serialisation formats for the generated document."""

    JSON = "json"
    YAML = "yaml"


class BuildConfig(BaseModel):
    """Effective settings for one build, resolved by
    :func:`~atproto_openapi.config.resolve_config`.
    """

    lexicon_dir: Path = Field(
        default=Path("lexicons"), description="Root directory scanned for *.json lexicons"
    )
    output: Path = Field(
        default=Path("spec/api.json"), description="Where the OpenAPI document is written"
    )
    format: OutputFileFormat = Field(
        default=OutputFileFormat.JSON, description="Output format: json, yaml"
    )
    workers: int = Field(
        default=1, ge=1, description="Threads used to load and convert lexicons"
    )


@dataclass
class BuildStats:
    """Counters collected while assembling a document.

    Attributes:
        documents: Lexicon files processed.
        schemas: Schema merges performed.
        operations: Path merges performed.
        skipped: Identifiers excluded from publication.
        dropped: Identifiers dispatched without output (subscriptions and
            unrepresentable operations).
        collisions: Merges that overwrote a different earlier value.
    """

    documents: int = 0
    schemas: int = 0
    operations: int = 0
    skipped: list[str] = field(default_factory=list)
    dropped: list[str] = field(default_factory=list)
    collisions: int = 0
