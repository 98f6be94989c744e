"""
YAML genesis loader with schema validation.

Loads a genesis configuration (world parameters plus initial entity names)
from YAML and validates it against a JSON schema. Schema failures are
reported all at once, each prefixed with the offending field path.
"""

import yaml
import json
from pathlib import Path
from typing import List, Optional
import jsonschema

from .data_types import GenesisConfig, GenesisParameters
from .errors import WorldStateError

GENESIS_SCHEMA_FILE = "genesis.schema.json"


class DataLoadError(WorldStateError):
    """Raised when data loading or validation fails"""
    pass


def read_genesis_document(file_path: Path) -> dict:
    """
    Read a genesis YAML file into a mapping.

    Raises:
        DataLoadError: file missing, unparsable, or not a mapping at top level
    """
    file_path = Path(file_path)
    try:
        text = file_path.read_text()
    except FileNotFoundError:
        raise DataLoadError(f"Genesis file not found: {file_path}")

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DataLoadError(f"YAML parse error in {file_path}: {e}")

    if not isinstance(document, dict):
        raise DataLoadError(f"Genesis file {file_path} must hold a mapping, got {type(document).__name__}")
    return document


def genesis_schema_errors(document: dict, schema_path: Path) -> List[str]:
    """
    Check a genesis document against its schema.

    Returns:
        One "<field.path>: <message>" line per violation, in document order;
        empty when the document is valid or the schema file is absent
    """
    schema_path = Path(schema_path)
    if not schema_path.exists():
        return []

    try:
        schema = json.loads(schema_path.read_text())
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON schema {schema_path}: {e}")

    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(document), key=lambda err: list(err.absolute_path))
    return [
        f"{'.'.join(str(p) for p in err.absolute_path) or '<root>'}: {err.message}"
        for err in errors
    ]


def load_genesis(file_path: Path, schema_dir: Optional[Path] = None) -> GenesisConfig:
    """Load genesis configuration from YAML"""
    file_path = Path(file_path)
    document = read_genesis_document(file_path)

    if schema_dir:
        problems = genesis_schema_errors(document, Path(schema_dir) / GENESIS_SCHEMA_FILE)
        if problems:
            raise DataLoadError(f"Validation errors in {file_path}: " + "; ".join(problems))

    try:
        parameters = GenesisParameters(**document.get('parameters', {}))
        return GenesisConfig(
            world_id=document['world_id'],
            name=document['name'],
            parameters=parameters,
            entities=list(document.get('entities', [])),
            description=document.get('description')
        )
    except (KeyError, TypeError) as e:
        raise DataLoadError(f"Malformed genesis file {file_path}: {e}")


def load_default_genesis(data_root: Path, schema_dir: Optional[Path] = None) -> GenesisConfig:
    """Load data_root/world/genesis.yaml (schemas default to data_root/schemas)"""
    data_root = Path(data_root)
    if schema_dir is None:
        schema_dir = data_root / "schemas"
    return load_genesis(data_root / "world" / "genesis.yaml", schema_dir)
