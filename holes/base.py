"""Abstract interfaces for building hole datasets and judging submissions."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar, Union

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")

logger = logging.getLogger(__name__)


class AbstractHoleGenerator(ABC, Generic[RecordT]):
    """Base class for dataset builders that emit hole records.

    A hole pairs the input handed to competitors with the expected output
    their submissions are diffed against. Subclasses decide how both are
    produced; this class owns the output directory and metadata file.
    """

    def __init__(self, output_dir: PathLike) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.input_dir = self.output_dir / "puzzles"
        self.solution_dir = self.output_dir / "solutions"
        for directory in (self.input_dir, self.solution_dir):
            directory.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def create_puzzle(self, *args, **kwargs) -> RecordT:
        """Create one hole, writing its assets under ``output_dir``."""

    def create_random_puzzle(self) -> RecordT:
        return self.create_puzzle()

    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[RecordT]:
        """Generate a batch of holes and optionally persist their metadata."""

        if count < 0:
            raise ValueError("count must not be negative")
        records = [self.create_random_puzzle() for _ in range(count)]
        if metadata_path is not None:
            self.write_metadata(records, metadata_path, append=append)
        return records

    def write_metadata(
        self,
        records: Iterable[RecordT],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> None:
        path = Path(metadata_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        existing: List[Dict[str, Any]] = []
        if append and path.exists():
            existing = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(existing, list):
                raise ValueError(f"Existing metadata in {path} is not a list of records")
        payload = [self.record_to_dict(record) for record in records]
        path.write_text(json.dumps(existing + payload, indent=2), encoding="utf-8")
        logger.debug("Wrote %d records to %s (%d kept)", len(payload), path, len(existing))

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        if hasattr(record, "to_dict"):
            return getattr(record, "to_dict")()
        raise TypeError(
            "Hole record must implement to_dict() or override record_to_dict() in the generator."
        )

    def write_text(self, path: Path, text: str) -> str:
        """Write a UTF-8 text asset and return its path relative to ``output_dir``."""

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return self.relativize_path(path)

    def relativize_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.output_dir).as_posix()
        except ValueError:
            return path.as_posix()


class AbstractHoleEvaluator(ABC):
    """Base class for judges that compare submissions with stored expectations."""

    def __init__(
        self,
        metadata_path: PathLike,
        *,
        base_dir: Optional[PathLike] = None,
    ) -> None:
        self.metadata_path = Path(metadata_path)
        if not self.metadata_path.exists():
            raise FileNotFoundError(f"Metadata file not found: {self.metadata_path}")
        self.base_dir = Path(base_dir) if base_dir is not None else self.metadata_path.parent
        self._records = self._load_metadata()

    @property
    def records(self) -> Dict[str, Dict[str, Any]]:
        return self._records

    def _load_metadata(self) -> Dict[str, Dict[str, Any]]:
        raw = json.loads(self.metadata_path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError("Hole metadata must be a list of records")
        records: Dict[str, Dict[str, Any]] = {}
        for record in raw:
            hole_id = record.get("id")
            if not hole_id:
                raise ValueError("Each hole record must include an 'id'")
            records[str(hole_id)] = record
        return records

    def get_record(self, puzzle_id: str) -> Dict[str, Any]:
        try:
            return self._records[puzzle_id]
        except KeyError as exc:
            raise KeyError(f"Hole id '{puzzle_id}' not found in metadata") from exc

    def resolve_path(self, path_value: object) -> Path:
        candidate = Path(str(path_value))
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        return candidate

    def read_text(self, path_value: object) -> str:
        path = self.resolve_path(path_value)
        if not path.exists():
            raise FileNotFoundError(f"Expected asset missing: {path}")
        return path.read_text(encoding="utf-8")

    @abstractmethod
    def evaluate(self, puzzle_id: str, *args, **kwargs):
        """Judge a candidate submission for the given hole."""


__all__ = [
    "AbstractHoleGenerator",
    "AbstractHoleEvaluator",
    "PathLike",
]
