"""Loading a schema document from disk."""

import logging
from pathlib import Path

from .errors import SchemaLoadError
from .parser import SDL_SUFFIXES, SchemaParser
from .schema import Schema, decode_schema, decode_schema_json

logger = logging.getLogger(__name__)


def load_schema(path: str | Path) -> Schema:
    """Load a schema from a JSON document or from GraphQL SDL.

    JSON files are decoded directly. SDL files (and directories containing
    them) are first converted to the JSON document shape by SchemaParser and
    then go through the same decoder.

    Raises:
        SchemaLoadError: If the file cannot be read or the SDL is invalid.
        DecodeError: If the document does not match the schema model.
    """
    path = Path(path)
    if path.is_dir() or path.suffix in SDL_SUFFIXES:
        logger.info("Parsing GraphQL SDL from %s", path)
        document = SchemaParser(str(path)).parse_document()
        return decode_schema(document)

    try:
        text = path.read_bytes()
    except OSError as exc:
        raise SchemaLoadError(f"Couldn't read schema file {path}: {exc}") from exc
    logger.info("Decoding schema document %s", path)
    return decode_schema_json(text)
