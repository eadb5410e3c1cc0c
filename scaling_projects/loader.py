"""
Descriptor Loader - Reads chain lists, token lists and project
descriptors from JSON files.

Files are validated against `schemas` and converted into the frozen
models. Any problem with a file is reported as DescriptorError naming
the file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ValidationError

from .assembler import ProjectContext, create_project_context
from .config import NormalizerConfig, get_config
from .exceptions import DescriptorError
from .models import ChainDescriptor, ProjectDescriptor, Token
from .schemas import ChainListSchema, ProjectListSchema, TokenListSchema


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _read_json(path: PathLike) -> Any:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise DescriptorError(
            f"Descriptor file not found: {path}",
            source=str(path),
            original_error=e,
        ) from e
    except OSError as e:
        raise DescriptorError(
            f"Cannot read descriptor file {path}: {e.strerror or e}",
            source=str(path),
            original_error=e,
        ) from e
    except json.JSONDecodeError as e:
        raise DescriptorError(
            f"Invalid JSON in {path} (line {e.lineno})",
            source=str(path),
            original_error=e,
        ) from e
    except UnicodeDecodeError as e:
        raise DescriptorError(
            f"Descriptor file {path} is not valid UTF-8",
            source=str(path),
            original_error=e,
        ) from e


def _validate(schema: type[BaseModel], data: Any, source: str) -> Any:
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise DescriptorError(
            f"{source} does not match {schema.__name__}: {e.error_count()} errors",
            source=source,
            original_error=e,
            context={"errors": e.errors(include_url=False)},
        ) from e


def parse_chains(data: Any, source: str = "<memory>") -> list[ChainDescriptor]:
    schema = _validate(ChainListSchema, data, source)
    return [c.to_model() for c in schema.chains]


def parse_tokens(data: Any, source: str = "<memory>") -> list[Token]:
    schema = _validate(TokenListSchema, data, source)
    return [t.to_model() for t in schema.tokens]


def parse_projects(data: Any, source: str = "<memory>") -> list[ProjectDescriptor]:
    schema = _validate(ProjectListSchema, data, source)
    return [p.to_model() for p in schema.projects]


def load_chains(path: PathLike) -> list[ChainDescriptor]:
    """Load `{"chains": [{"name", "chainId"}, ...]}`."""
    chains = parse_chains(_read_json(path), str(path))
    logger.info(f"Loaded {len(chains)} chains from {path}")
    return chains


def load_tokens(path: PathLike) -> list[Token]:
    """Load `{"tokens": [{"symbol", "chainId", ...}, ...]}`."""
    tokens = parse_tokens(_read_json(path), str(path))
    logger.info(f"Loaded {len(tokens)} tokens from {path}")
    return tokens


def load_projects(path: PathLike) -> list[ProjectDescriptor]:
    """Load `{"projects": [...]}` with layer2, bridge and layer3 entries."""
    projects = parse_projects(_read_json(path), str(path))
    logger.info(f"Loaded {len(projects)} project descriptors from {path}")
    return projects


def load_context(config: Optional[NormalizerConfig] = None) -> ProjectContext:
    """Build the project context from the configured chain and token files."""
    config = config or get_config()
    return create_project_context(
        chains=load_chains(config.chains_path),
        tokens=load_tokens(config.tokens_path),
    )
