"""Build-tool transform hook: inject call-site metadata into logging calls."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from parse.console_calls import extract_console_calls
from parse.source import SourceText
from parse.treesitter_js import parse_region
from rules.config import TransformOptions, coerce_options
from rules.eligibility import check_eligibility
from splice.buffer import SpliceSet
from splice.sourcemap import SourceMap, build_source_map
from transform.region import SourceUnit, resolve_region
from transform.synthesize import synthesize

if TYPE_CHECKING:
    from collections.abc import Callable

    from sfc.extract import SfcExtractor
    from splice.buffer import Splice
    from transform.region import Region

logger = logging.getLogger(__name__)


class TransformResult(BaseModel):
    """Rewritten module text and its source map."""

    code: str
    map: SourceMap


def collect_splices(
    unit: SourceUnit,
    region: Region,
    options: TransformOptions,
) -> SpliceSet:
    """Parse the region and gather the insertions for every eligible call.

    Raises:
        ParseError: the region does not parse.
    """
    source = SourceText(region.text)
    tree = parse_region(source, region.lang, path=unit.path)
    call_sites = extract_console_calls(
        tree,
        source,
        logger_object=options.logger_object,
        methods=options.methods,
    )

    lines = unit.text.split("\n")
    operations: list[Splice] = []
    for site in call_sites:
        exclusion = check_eligibility(
            site, unit=unit, region=region, lines=lines, options=options
        )
        if exclusion is not None:
            logger.debug(
                "Skipping %s at %s:%d (%s)",
                site.callee,
                unit.path,
                region.map_line(site.line),
                exclusion.value,
            )
            continue
        operations.extend(synthesize(site, unit=unit, region=region, options=options))

    logger.debug(
        "%s: %d logging calls, %d insertions",
        unit.path,
        len(call_sites),
        len(operations),
    )
    return SpliceSet.of(operations)


def emit(
    unit: SourceUnit, splices: SpliceSet, options: TransformOptions
) -> TransformResult:
    """Apply the insertions over the original text and build the map."""
    return TransformResult(
        code=splices.apply(unit.text),
        map=build_source_map(
            unit.text,
            splices,
            source=unit.path,
            include_content=options.include_content,
        ),
    )


def transform(
    id: str,
    code: str,
    options: TransformOptions | Mapping[str, Any] | None = None,
    *,
    extractor_factory: Callable[[], SfcExtractor] | None = None,
) -> TransformResult:
    """Rewrite one module for the host build tool.

    Args:
        id: Module id as given by the bundler (may carry a query string).
        code: Full module text.
        options: ``TransformOptions`` or a plain mapping of them.
        extractor_factory: Override for the SFC extractor provider.

    Raises:
        ConfigError: ``options`` fail validation.
        ParseError: the code to analyze does not parse.
        UnsupportedLanguageError: the script block declares an unknown lang.
    """
    resolved_options = coerce_options(options)
    unit = SourceUnit.from_code(id, code)
    if extractor_factory is None:
        region = resolve_region(unit)
    else:
        region = resolve_region(unit, extractor_factory)

    splices = collect_splices(unit, region, resolved_options)
    return emit(unit, splices, resolved_options)


__all__ = ["TransformResult", "collect_splices", "emit", "transform"]
