"""Combine partial schemas into one."""

from collections.abc import Iterable
from itertools import chain
from logging import getLogger

from schema.errors import EmptyInputError
from schema.normalize import normalize_schema
from schema.types import SpannerSchema

logger = getLogger(__name__)


def merge_schemas(fragments: Iterable[SpannerSchema]) -> SpannerSchema:
    """Concatenate fragments in order and normalize the union.

    Tables with the same name in different fragments are all kept.
    """
    fragments = list(fragments)
    merged: SpannerSchema = {
        "tables": list(chain.from_iterable(f.get("tables") or [] for f in fragments)),
    }
    if not merged["tables"]:
        msg = "No tables found in the provided schema fragments"
        raise EmptyInputError(msg)

    if foreign_keys := list(
        chain.from_iterable(f.get("foreignKeys") or [] for f in fragments),
    ):
        merged["foreignKeys"] = foreign_keys

    if indexes := list(chain.from_iterable(f.get("indexes") or [] for f in fragments)):
        merged["indexes"] = indexes

    logger.debug(
        "Merged %d fragments into %d tables",
        len(fragments),
        len(merged["tables"]),
    )
    return normalize_schema(merged)
