"""Drive lexicon files through filtering, dispatch and assembly.

For each source, in order:

1. Load the lexicon.
2. Record its tag.
3. For each definition, in the order the file declares them, derive its
   identifier, drop it if it must not be published, otherwise dispatch it
   and merge the result.

Loading and dispatch are pure per file, so with ``workers > 1`` they run on a
thread pool. Results are still merged on the calling thread in source
order, which keeps the single-writer rule for the assembler and makes the
output identical to a sequential run.

Errors from loading or dispatch propagate unchanged; the caller never sees
a partial document.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Union

from atproto_openapi.generator.assembler import DocumentAssembler
from atproto_openapi.generator.dispatcher import DEFAULT_CONVERTERS, Converters, dispatch
from atproto_openapi.generator.publication import exclusion_reason
from atproto_openapi.lexicon.identifiers import calculate_tag, identifier_for
from atproto_openapi.lexicon.loader import discover_lexicons, load_lexicon
from atproto_openapi.models import BuildConfig, BuildStats, DispatchResult, LexiconDocument

logger = logging.getLogger(__name__)

Loader = Callable[[Any], LexiconDocument]


@dataclass(frozen=True)
class Skipped:
    """A definition the publication filter kept out of the document."""

    identifier: str
    reason: str


@dataclass
class _FileResult:
    document_id: str
    tag: str
    steps: list[Union[Skipped, DispatchResult]] = field(default_factory=list)


@dataclass
class BuildResult:
    """Outcome of a successful pipeline run."""

    document: dict[str, Any]
    stats: BuildStats


def run_pipeline(
    sources: Iterable[Any],
    loader: Loader = load_lexicon,
    *,
    converters: Converters = DEFAULT_CONVERTERS,
    workers: int = 1,
) -> BuildResult:
    """Convert every lexicon in *sources* into one OpenAPI document.

    Args:
        sources: File handles (usually paths) accepted by *loader*.
        loader: Turns a source into a :class:`LexiconDocument`.
        converters: Converter bundle handed to the dispatcher.
        workers: Threads used for loading and dispatch; ``1`` runs inline.

    Returns:
        A :class:`BuildResult` with the finalized document and counters.

    Raises:
        MalformedLexiconError: If a source cannot be loaded.
        UnknownDefinitionTypeError: If a publishable definition has an
            unrecognised type.
    """
    if workers < 1:
        raise ValueError("workers must be at least 1")

    def convert_file(source: Any) -> _FileResult:  # noqa: ANN401
        return _convert_file(loader(source), converters)

    assembler = DocumentAssembler()
    for result in _map_in_order(convert_file, sources, workers):
        _merge_file(assembler, result)

    document = assembler.finalize()
    return BuildResult(document=document, stats=assembler.stats)


def build(config: BuildConfig, converters: Converters = DEFAULT_CONVERTERS) -> BuildResult:
    """Discover the lexicons under ``config.lexicon_dir`` and run the pipeline."""
    sources = discover_lexicons(config.lexicon_dir)
    logger.debug("found %d lexicon files under %s", len(sources), config.lexicon_dir)
    return run_pipeline(sources, converters=converters, workers=config.workers)


def _map_in_order(
    func: Callable[[Any], _FileResult], sources: Iterable[Any], workers: int
) -> Iterator[_FileResult]:
    if workers == 1:
        for source in sources:
            yield func(source)
        return

    with ThreadPoolExecutor(max_workers=workers) as pool:
        yield from pool.map(func, sources)


def _convert_file(document: LexiconDocument, converters: Converters) -> _FileResult:
    """Filter and dispatch every definition of one lexicon."""
    result = _FileResult(document_id=document.id, tag=calculate_tag(document.id))
    for name, definition in document.defs.items():
        identifier = identifier_for(document.id, name)
        reason = exclusion_reason(identifier, definition)
        if reason is not None:
            result.steps.append(Skipped(identifier, reason))
            continue
        result.steps.append(dispatch(document.id, name, definition, converters))
    return result


def _merge_file(assembler: DocumentAssembler, result: _FileResult) -> None:
    logger.info("%s", result.document_id)
    assembler.stats.documents += 1
    assembler.record_tag(result.tag)
    for step in result.steps:
        if isinstance(step, Skipped):
            assembler.record_skip(step.identifier, step.reason)
        else:
            assembler.merge(step)
