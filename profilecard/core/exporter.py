"""Persist a StatsRecord as JSON next to the rendered card."""

from pathlib import Path

from profilecard.models.stats import StatsRecord


def to_json(record: StatsRecord, indent: int = 2) -> str:
    return record.model_dump_json(indent=indent)


def to_dict(record: StatsRecord) -> dict:
    """Plain dict with only JSON types, suitable for json.dumps."""
    return record.model_dump(mode="json")


def save_json(record: StatsRecord, filepath: str | Path, indent: int = 2) -> Path:
    """
    Write the record to filepath, creating missing parent directories.

    Returns the path written so callers can report it.
    """
    target = Path(filepath)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(to_json(record, indent=indent) + "\n", encoding="utf-8")
    return target


def load_json(filepath: str | Path) -> StatsRecord:
    """
    Read a record written by save_json.

    Raises:
        pydantic.ValidationError: If the file breaks a record invariant
    """
    return StatsRecord.model_validate_json(Path(filepath).read_text(encoding="utf-8"))
