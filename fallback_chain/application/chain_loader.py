"""
Chain loader - turns declarative chain definitions into attempt chains.

A definition is a JSON document of the form:

    {
      "attempts": [
        {"name": "primary", "method": "GET", "target": "https://a.example/items", "json": true},
        {"name": "mirror", "method": "POST", "target": "https://b.example/items",
         "body": {"query": "items"}, "headers": {"Accept": "application/json"}}
      ]
    }

Attempts are listed in fallback order: the first is tried first.
"""

from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..domain.errors import ChainConfigurationError
from ..domain.interfaces.collaborators import Codec, EventLogger
from ..domain.models.attempt import AttemptChain
from ..domain.services.chain_builder import AttemptBuilder, ChainDirector


class AttemptDefinition(BaseModel):
    """One attempt as written in a chain definition."""

    model_config = ConfigDict(populate_by_name=True, extra='forbid')

    name: str
    method: str = 'GET'
    target: str
    returns_json: bool = Field(True, alias='json')
    body: Optional[Any] = None
    headers: Optional[Dict[str, str]] = None

    @field_validator('method')
    @classmethod
    def normalize_method(cls, v: str) -> str:
        return v.strip().upper()


class ChainDefinition(BaseModel):
    """An ordered list of attempts."""

    model_config = ConfigDict(extra='forbid')

    attempts: List[AttemptDefinition] = Field(..., min_length=1)

    @field_validator('attempts')
    @classmethod
    def unique_names(cls, v: List[AttemptDefinition]) -> List[AttemptDefinition]:
        names = [a.name for a in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate attempt names: {', '.join(duplicates)}")
        return v


def parse_chain_definition(data: Mapping[str, Any]) -> ChainDefinition:
    """Validate a chain definition. Raises ChainConfigurationError."""
    try:
        return ChainDefinition.model_validate(data)
    except ValidationError as e:
        raise ChainConfigurationError(f"Invalid chain definition: {e}") from e


def load_chain_definition(path: Union[str, Path]) -> ChainDefinition:
    """Read and validate a JSON chain definition file."""
    try:
        raw = Path(path).read_text(encoding='utf-8')
    except OSError as e:
        raise ChainConfigurationError(f"Cannot read chain definition {path}: {e}") from e
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ChainConfigurationError(f"Chain definition {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ChainConfigurationError(f"Chain definition {path} must be a JSON object")
    return parse_chain_definition(data)


def build_chain(
    definition: ChainDefinition,
    output: Any = None,
    error_target: Any = None,
    logger: Optional[EventLogger] = None,
    codec: Optional[Codec] = None,
    director: Optional[ChainDirector] = None
) -> AttemptChain:
    """Build the chain through the director; all attempts share output and error targets."""
    director = director or ChainDirector()
    builders = [
        AttemptBuilder(
            name=attempt.name,
            method=attempt.method,
            target=attempt.target,
            returns_json=attempt.returns_json,
            body=attempt.body,
            headers=attempt.headers,
            output=output,
            error_target=error_target,
            logger=logger,
            codec=codec,
        )
        for attempt in definition.attempts
    ]
    return director.create_chain(builders)
