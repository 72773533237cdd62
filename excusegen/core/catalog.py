"""
Excuse catalog - the static, read-only excuse collection.

The catalog is built once during application startup from one or more raw
sources (situation -> record or list of records) and then handed to whoever
needs it. Nothing mutates it afterwards; newly generated excuses go to the
database, never into the catalog.
"""

import json
import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .believability import estimate_believability
from .normalize import normalize_length, normalize_tone
from .schema import ExcuseRecord
from ..util.logging import logger

MASTER_FILE = "master-excuses.json"
MANIFEST_FILE = "index.json"


@dataclass
class CatalogStats:
    total_situations: int
    total_excuses: int
    excuses_by_situation: Dict[str, int] = field(default_factory=dict)

    @property
    def situations(self) -> List[str]:
        return list(self.excuses_by_situation)


class Catalog(Mapping):
    """Immutable mapping of situation name to a non-empty tuple of ExcuseRecord."""

    def __init__(self, entries: Optional[Dict[str, Iterable[ExcuseRecord]]] = None):
        frozen = {}
        for situation, records in (entries or {}).items():
            records = tuple(records)
            if records:
                frozen[situation] = records
        self._entries = MappingProxyType(frozen)

    def __getitem__(self, situation: str) -> Tuple[ExcuseRecord, ...]:
        return self._entries[situation]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def records(self, situation: str) -> Tuple[ExcuseRecord, ...]:
        """Records for a situation, or an empty tuple when it is not loaded."""
        return self._entries.get(situation, ())

    def has_local_excuses(self, situation: str) -> bool:
        return bool(self.records(situation))

    @property
    def situations(self) -> List[str]:
        return list(self._entries)

    def total_excuses(self) -> int:
        return sum(len(records) for records in self._entries.values())

    def stats(self) -> CatalogStats:
        return CatalogStats(
            total_situations=len(self._entries),
            total_excuses=self.total_excuses(),
            excuses_by_situation={situation: len(records) for situation, records in self._entries.items()},
        )


def _build_record(raw: Any, rng: random.Random = None) -> Optional[ExcuseRecord]:
    if not isinstance(raw, dict):
        return None

    text = raw.get("excuse")
    if not isinstance(text, str) or not text.strip():
        return None

    tone = normalize_tone(raw.get("tone") or "")
    length = normalize_length(raw.get("length") or "")

    rating = raw.get("believabilityRating")
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        # Filled in once here so a record keeps the same rating for the life of the process
        rating = estimate_believability(tone, rng)

    return ExcuseRecord(
        excuse_text=text.strip(),
        tone=tone,
        length=length,
        believability_rating=max(0, min(100, int(rating))),
    )


def _coerce_records(raw: Any, rng: random.Random = None) -> List[ExcuseRecord]:
    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        return []

    records = []
    for item in raw:
        record = _build_record(item, rng)
        if record is not None:
            records.append(record)
    return records


def load_catalog(sources: Iterable[Any], rng: random.Random = None) -> Catalog:
    """Build a catalog from raw sources in precedence order.

    The first source that yields at least one usable record for a situation
    wins; later sources only fill situations that are still unresolved.
    Values that are not a non-empty object or array are skipped.
    """
    resolved: Dict[str, List[ExcuseRecord]] = {}
    unresolved = set()

    for index, source in enumerate(sources):
        if not isinstance(source, Mapping):
            logger.warning(f"Catalog source #{index} is not a situation mapping; skipping")
            continue

        for situation, raw in source.items():
            if situation in resolved:
                continue

            records = _coerce_records(raw, rng)
            if records:
                resolved[situation] = records
                unresolved.discard(situation)
            else:
                unresolved.add(situation)

    catalog = Catalog(resolved)
    for situation in sorted(unresolved):
        logger.warning(f"Catalog situation '{situation}' has no usable excuses; skipped")
    logger.log_catalog_load(len(catalog), catalog.total_excuses(), len(unresolved))
    return catalog


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to read catalog file {path}: {e}")
        return None


def situation_from_filename(path) -> str:
    """Situation name for a per-situation file: ``missed-deadline.json`` -> "Missed deadline"."""
    return Path(path).stem.replace("-", " ").replace("_", " ").strip().capitalize()


def read_catalog_sources(directory) -> List[Any]:
    """Collect raw sources from a catalog directory in precedence order.

    1. ``master-excuses.json`` (situation -> records), if present.
    2. Per-situation files listed in ``index.json`` (situation -> file name),
       or, without a manifest, every other ``*.json`` file. A file holding a
       situation -> records mapping is used as is; a file holding records
       (an array or a single object) is filed under the situation named by
       its file name, so ``late-to-work.json`` becomes "Late to work".
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning(f"Catalog directory not found: {directory}")
        return []

    sources = []

    master_path = directory / MASTER_FILE
    if master_path.exists():
        master = _read_json(master_path)
        if master is not None:
            sources.append(master)

    manifest_path = directory / MANIFEST_FILE
    if manifest_path.exists():
        manifest = _read_json(manifest_path)
        per_situation = {}
        if isinstance(manifest, dict):
            for situation, filename in manifest.items():
                data = _read_json(directory / str(filename))
                if data is not None:
                    per_situation[situation] = data
        sources.append(per_situation)
    else:
        for path in sorted(directory.glob("*.json")):
            if path.name == MASTER_FILE:
                continue
            data = _read_json(path)
            if data is None:
                continue
            if isinstance(data, list) or (isinstance(data, dict) and "excuse" in data):
                data = {situation_from_filename(path): data}
            sources.append(data)

    return sources


def load_catalog_dir(directory, rng: random.Random = None) -> Catalog:
    """Load the catalog from a directory of JSON sources."""
    return load_catalog(read_catalog_sources(directory), rng)
