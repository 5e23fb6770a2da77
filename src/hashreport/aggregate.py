import logging
from typing import Iterable, Iterator, NamedTuple

from .source.csv_report import InputRecord

logger = logging.getLogger(__name__)


class Occurrence(NamedTuple):
    """A single listing of a file under some hash."""
    path: str
    size_bytes: str


class HashGroup:
    """Every occurrence sharing one hash, in the order they were encountered.

    Groups only grow: occurrences are appended and never removed.
    """

    def __init__(self, hash_value: str):
        self._hash = hash_value
        self._occurrences: list[Occurrence] = []

    @property
    def hash(self) -> str:
        return self._hash

    @property
    def occurrences(self) -> tuple[Occurrence, ...]:
        return tuple(self._occurrences)

    def append(self, occurrence: Occurrence):
        self._occurrences.append(occurrence)

    def is_orphan(self) -> bool:
        """True if the hash was seen exactly once."""
        return len(self._occurrences) == 1

    def is_duplicate(self) -> bool:
        """True if the hash was seen two or more times."""
        return len(self._occurrences) >= 2

    def __len__(self) -> int:
        return len(self._occurrences)

    def __iter__(self) -> Iterator[Occurrence]:
        return iter(self._occurrences)

    def __repr__(self):
        return f"<HashGroup hash={self._hash}, count={len(self._occurrences)}>"


class HashAggregate:
    """Mapping from normalized hash to the HashGroup of its occurrences for one run.

    The aggregate is built by folding records from every input in order and is then
    read once by the report writer. Iteration follows the order in which hashes were
    first seen, which keeps output deterministic within a run.
    """

    def __init__(self):
        self._groups: dict[str, HashGroup] = {}
        self._occurrence_count = 0

    def group_for(self, hash_value: str) -> HashGroup:
        """Return the group for hash_value, creating an empty one on first sight."""
        group = self._groups.get(hash_value)
        if group is None:
            group = self._groups[hash_value] = HashGroup(hash_value)
            logger.debug(f"Added new group for first time hash {hash_value}")
        return group

    def add(self, record: InputRecord):
        """Append the occurrence described by record to the group of its hash."""
        self.group_for(record.hash).append(Occurrence(record.path, record.size_bytes))
        self._occurrence_count += 1

    def ingest(self, records: Iterable[InputRecord]) -> int:
        """Consume records in order, adding each to the aggregate.

        Returns:
            Number of records consumed
        """
        count = 0
        for record in records:
            self.add(record)
            count += 1
        return count

    @property
    def hash_count(self) -> int:
        return len(self._groups)

    @property
    def occurrence_count(self) -> int:
        return self._occurrence_count

    def groups(self, sort_hashes: bool = False) -> Iterator[HashGroup]:
        """Iterate over all groups, in first-seen order or sorted by hash."""
        if sort_hashes:
            for hash_value in sorted(self._groups):
                yield self._groups[hash_value]
        else:
            yield from self._groups.values()

    def __contains__(self, hash_value: object) -> bool:
        return hash_value in self._groups

    def __getitem__(self, hash_value: str) -> HashGroup:
        return self._groups[hash_value]

    def __len__(self) -> int:
        return len(self._groups)


def ingest(aggregate: HashAggregate, records: Iterable[InputRecord]) -> int:
    """Fold records into aggregate. See HashAggregate.ingest()."""
    return aggregate.ingest(records)
