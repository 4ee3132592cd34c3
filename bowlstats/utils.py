"""Utility functions for file I/O."""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .models import League
from .schemas import LeagueSchema

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('bowlstats.utils')


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with optional schema validation.

    Args:
        path: Path to JSON file (str or Path object)
        schema: Optional Pydantic model to validate against

    Returns:
        Parsed JSON (validated if schema provided)

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        ValueError: If schema validation fails

    Example:
        from bowlstats.schemas import LeagueSchema
        league = load_json('data/league.json', schema=LeagueSchema)
    """
    path = Path(path)

    logger.debug(f'Loading JSON from: {path}')

    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema:
        try:
            validated = schema.model_validate(data)
            logger.debug(f'Schema validation passed for: {path}')
            return validated
        except ValidationError as e:
            logger.error(f'Schema validation failed for {path}: {e}')
            raise ValueError(f'Schema validation failed for {path}:\n{e}') from e

    return data


def load_league(path: Path | str) -> League:
    """
    Load and validate a league document, returning the undecorated league.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the document does not match the league schema
    """
    document = load_json(path, schema=LeagueSchema)
    league = document.to_model()
    logger.info(f'Loaded league {league.id} ({league.name}) with {len(league.teams)} tracked teams')
    return league
