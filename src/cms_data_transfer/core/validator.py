"""JSON Schema validation for snapshots and transfer records.

This module loads the JSON Schemas shipped in ``cms_data_transfer/schemas/``
and validates documents against them.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .errors import SnapshotValidationError
from .types import TransferStage

# cms_data_transfer/core/validator.py -> cms_data_transfer/schemas/
SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    """Load a JSON schema from disk.

    Args:
        name: Schema name without suffix, e.g. 'snapshot' or 'records'

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    schema_path = SCHEMAS_DIR / f"{name}.schema.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    with schema_path.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def _format_error(e: ValidationError) -> tuple[str, str]:
    error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
    return error_path, f"Validation error at {error_path}: {e.message}"


def validate_snapshot(document: dict[str, Any]) -> None:
    """Validate a snapshot document against the snapshot schema.

    Args:
        document: Parsed snapshot document

    Raises:
        SnapshotValidationError: If the document doesn't conform to the schema
    """
    try:
        jsonschema.validate(instance=document, schema=load_schema("snapshot"))
    except ValidationError as e:
        error_path, error_msg = _format_error(e)
        raise SnapshotValidationError(error_msg, path=error_path) from e


def _record_schema(stage: TransferStage) -> dict[str, Any]:
    schema = load_schema("records")
    return {
        "$schema": schema["$schema"],
        "$defs": schema["$defs"],
        "$ref": f"#/$defs/{stage.value}",
    }


def validate_record(stage: TransferStage | str, record: Any) -> None:
    """Validate one record emitted on a transfer stage.

    Args:
        stage: Transfer stage the record was emitted on
        record: The record to validate

    Raises:
        ValidationError: If the record doesn't match the stage's shape
        ValueError: If stage is not a known transfer stage
    """
    jsonschema.validate(instance=record, schema=_record_schema(TransferStage(stage)))


def validate_record_with_error_details(
    stage: TransferStage | str, record: Any
) -> tuple[bool, str | None]:
    """Validate a record and return detailed error information.

    Convenience wrapper that catches validation errors and returns
    readable messages.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_record(stage, record)
        return True, None
    except ValidationError as e:
        _, error_msg = _format_error(e)

        if e.instance:
            error_msg += f"\nInvalid value: {e.instance}"

        return False, error_msg
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"
