#!/usr/bin/env python3
"""Validate GigTrack data files and backups against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_data_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single data file or JSON backup. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        # Bare YAML dates load as date objects; the schema expects strings
        validate(instance=_stringify_dates(data), schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def _stringify_dates(value):
    if isinstance(value, dict):
        return {k: _stringify_dates(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify_dates(v) for v in value]
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def main(argv=None):
    """Validate the given files, or every data file in the data/ directory."""
    schema = load_schema()
    argv = sys.argv[1:] if argv is None else argv

    if argv:
        files = [Path(p) for p in argv]
    else:
        data_dir = Path(__file__).parent / "data"
        if not data_dir.exists():
            print(f"Error: data directory not found: {data_dir}")
            return 1
        files = sorted(
            list(data_dir.glob("*.yaml"))
            + list(data_dir.glob("*.yml"))
            + list(data_dir.glob("*.json"))
        )

    if not files:
        print("Warning: No data files found")
        return 0

    all_valid = True
    for filepath in files:
        errors = validate_data_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
