from __future__ import annotations

import itertools
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

import pandas as pd

from .cells import SUPPORTED_CELL_TYPES, CellValue
from .decorators import ColumnDecorator
from .exceptions import DatasetSchemaError, UnknownColumnError

logger = logging.getLogger(__name__)

EMPTY_CELL = ""

_dataset_uids = itertools.count(1)


@dataclass
class Column:
    """
    A single named column.

    - id: unique column identifier (also the header text)
    - values: ordered cell values; may be shorter than the dataset row count
    - decorator: optional presentation hook, only used by the render layer
    """
    id: str
    values: List[CellValue] = field(default_factory=list)
    decorator: Optional[ColumnDecorator] = None

    def value_at(self, index: int) -> CellValue:
        if 0 <= index < len(self.values):
            return self.values[index]
        return EMPTY_CELL


class Row(Mapping):
    """
    Read-only view of one row: column id -> cell value.

    Rows are derived, never stored. `row_id` is the stable identity of the row,
    `index` its position in the Dataset at the time it was materialised.
    """

    __slots__ = ("_cells", "row_id", "index")

    def __init__(self, cells: Dict[str, CellValue], row_id: int, index: int) -> None:
        self._cells = cells
        self.row_id = row_id
        self.index = index

    @property
    def token(self) -> str:
        """Selection token for this row."""
        return str(self.row_id)

    def __getitem__(self, column: str) -> CellValue:
        return self._cells[column]

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Row(row_id={self.row_id}, cells={self._cells!r})"


class RowSequence(Sequence):
    """
    Lazy, restartable sequence of Rows over a Dataset snapshot.

    Each access builds the Row on demand; iterating twice yields equal rows.
    """

    def __init__(self, dataset: "Dataset") -> None:
        self._dataset = dataset
        self._length = dataset.row_count()
        self._row_ids = dataset.row_ids()

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(self._length))]
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("row index out of range")
        cells = {cid: col.value_at(index) for cid, col in self._dataset.columns.items()}
        return Row(cells, row_id=self._row_ids[index], index=index)


class Dataset:
    """
    Columnar, in-memory table used throughout the browser.

    Includes:
    - Insertion-ordered columns (order == display order)
    - Tolerant row materialisation (short columns are padded with "")
    - Stable row ids, so selections survive sorting, filtering and deletion
    - A version counter bumped on every mutation, used to invalidate derived views
    """

    # -------------------------------------------------------------------------
    # Constructor
    # -------------------------------------------------------------------------
    def __init__(self, columns: Iterable[Column], name: str = "table") -> None:
        self.name = name
        self.columns: Dict[str, Column] = {}

        for col in columns:
            if not isinstance(col.id, str):
                raise DatasetSchemaError(f"Column id must be a string, got {col.id!r}")
            if col.id in self.columns:
                raise DatasetSchemaError(f"Duplicate column id '{col.id}'")
            for value in col.values:
                if not isinstance(value, SUPPORTED_CELL_TYPES):
                    raise DatasetSchemaError(
                        f"Column '{col.id}' holds unsupported cell value {value!r} "
                        f"({type(value).__name__})"
                    )
            self.columns[col.id] = col

        self.uid = next(_dataset_uids)
        self.version = 0
        self._row_ids: List[int] = list(range(self.row_count()))
        self._next_row_id = len(self._row_ids)

    # -------------------------------------------------------------------------
    # Alternative constructors
    # -------------------------------------------------------------------------
    @classmethod
    def from_records(
        cls,
        data: Dict[str, Any],
        name: str = "table",
        decorators: Optional[Dict[str, ColumnDecorator]] = None,
    ) -> "Dataset":
        """
        Build a Dataset from a plain mapping.

        Accepts either form per column:
            {"Name": {"values": ["a", "b"]}}
            {"Name": ["a", "b"]}
        """
        decorators = decorators or {}
        columns: List[Column] = []
        for column_id, spec in data.items():
            if isinstance(spec, dict):
                values = spec.get("values", [])
            else:
                values = spec
            columns.append(
                Column(id=column_id, values=list(values), decorator=decorators.get(column_id))
            )
        return cls(columns, name=name)

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        name: str = "table",
        decorators: Optional[Dict[str, ColumnDecorator]] = None,
    ) -> "Dataset":
        """
        Build a Dataset from a DataFrame. NaN cells become "" and numpy scalars are
        converted to plain Python values.
        """
        decorators = decorators or {}
        columns: List[Column] = []
        for column_id in df.columns:
            series = df[column_id]
            values = [_to_cell(v) for v in series.tolist()]
            columns.append(Column(id=str(column_id), values=values, decorator=decorators.get(str(column_id))))
        return cls(columns, name=name)

    def to_frame(self) -> pd.DataFrame:
        """Padded, row-aligned DataFrame copy of the table."""
        n = self.row_count()
        return pd.DataFrame(
            {cid: [col.value_at(i) for i in range(n)] for cid, col in self.columns.items()}
        )

    # -------------------------------------------------------------------------
    # Shape
    # -------------------------------------------------------------------------
    @property
    def column_ids(self) -> List[str]:
        return list(self.columns.keys())

    def column(self, column_id: str) -> Column:
        try:
            return self.columns[column_id]
        except KeyError:
            raise UnknownColumnError(f"Column '{column_id}' not found in dataset '{self.name}'")

    def row_count(self) -> int:
        if not self.columns:
            return 0
        return max(len(col.values) for col in self.columns.values())

    def is_ragged(self) -> bool:
        lengths = {len(col.values) for col in self.columns.values()}
        return len(lengths) > 1

    # -------------------------------------------------------------------------
    # Rows
    # -------------------------------------------------------------------------
    def materialize_rows(self) -> RowSequence:
        return RowSequence(self)

    def row_ids(self) -> List[int]:
        """
        Stable ids aligned with current row positions.

        If columns were edited in place and the row count drifted, ids are
        extended with fresh values or truncated to match.
        """
        n = self.row_count()
        if len(self._row_ids) < n:
            missing = n - len(self._row_ids)
            self._row_ids.extend(range(self._next_row_id, self._next_row_id + missing))
            self._next_row_id += missing
        elif len(self._row_ids) > n:
            del self._row_ids[n:]
        return list(self._row_ids)

    def position_of(self, row_id: int) -> Optional[int]:
        try:
            return self.row_ids().index(row_id)
        except ValueError:
            return None

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------
    def delete_rows(self, row_ids: Iterable[int]) -> int:
        """
        Remove rows by stable id.

        All ids are resolved to positions before anything is removed, and rows are
        spliced out in descending position order so earlier removals cannot shift
        positions still waiting to be processed. Unknown ids are ignored.

        :return: number of rows removed
        """
        current = self.row_ids()
        position_by_id = {rid: pos for pos, rid in enumerate(current)}
        positions = sorted(
            {position_by_id[rid] for rid in row_ids if rid in position_by_id},
            reverse=True,
        )
        if not positions:
            return 0

        for pos in positions:
            for col in self.columns.values():
                if pos < len(col.values):
                    del col.values[pos]
            del self._row_ids[pos]

        self.touch()
        logger.info(
            "Deleted rows from dataset",
            extra={"dataset": self.name, "removed": len(positions), "remaining": self.row_count()},
        )
        return len(positions)

    def touch(self) -> None:
        """Mark the dataset as changed so cached views are re-derived."""
        self.version += 1

    def fingerprint(self) -> int:
        """
        Hash of the current contents (column ids, cell values and their types).

        Columns are public, so in-place edits to `Column.values` never bump
        `version`; caches add this to their key to notice such edits.
        """
        return hash(
            tuple(
                (cid, tuple(col.values), tuple(type(v) for v in col.values))
                for cid, col in self.columns.items()
            )
        )

    def __repr__(self) -> str:
        return f"Dataset(name={self.name!r}, columns={self.column_ids!r}, rows={self.row_count()})"


def _to_cell(value: Any) -> CellValue:
    if value is None:
        return EMPTY_CELL
    if hasattr(value, "item"):
        # numpy scalar
        value = value.item()
    if isinstance(value, float) and value != value:
        return EMPTY_CELL
    if isinstance(value, SUPPORTED_CELL_TYPES):
        return value
    return str(value)
