"""OpenAPI generator -- filter, dispatch and assemble lexicon definitions.

Typical usage::

    from atproto_openapi.generator import run_pipeline
    from atproto_openapi.lexicon import discover_lexicons

    result = run_pipeline(discover_lexicons("lexicons"))
    document = result.document

Sub-modules:

* :mod:`~atproto_openapi.generator.publication` -- Which definitions may be
  published.
* :mod:`~atproto_openapi.generator.dispatcher` -- Per-type routing to the
  converters.
* :mod:`~atproto_openapi.generator.assembler` -- Owner of the accumulating
  document.
* :mod:`~atproto_openapi.generator.pipeline` -- The driver tying the above
  together.
"""

from atproto_openapi.generator.assembler import DocumentAssembler
from atproto_openapi.generator.dispatcher import DEFAULT_CONVERTERS, Converters, dispatch
from atproto_openapi.generator.pipeline import BuildResult, build, run_pipeline
from atproto_openapi.generator.publication import exclusion_reason, is_publishable

__all__ = [
    "DEFAULT_CONVERTERS",
    "BuildResult",
    "Converters",
    "DocumentAssembler",
    "build",
    "dispatch",
    "exclusion_reason",
    "is_publishable",
    "run_pipeline",
]
