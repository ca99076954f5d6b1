"""
Observation table for the OLS Toolkit.

ObservationTable is the "I have data" abstraction. It presents ordered
column names, a declared kind per column (numeric or categorical), and
row iteration with explicit missing-value markers. It knows nothing about
regression; the design builder decides what to do with the columns.

Usage:
    from olstoolkit import ObservationTable

    table = ObservationTable.from_columns({'y': y, 'x': x, 'race': race})
    table = ObservationTable.from_records([{'y': 1.0, 'x': 2.0}, ...])
    table = ObservationTable.from_dataframe(df)
    table = ObservationTable.from_file("data.csv")

    table.columns          # ('y', 'x', 'race')
    table.kind('race')     # 'categorical'
    table['x']             # float64 array, NaN marks missing
    table.missing('race')  # boolean mask
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence
import numbers

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from olstoolkit.core.exceptions import SchemaError, ValidationError, DimensionError

NUMERIC = 'numeric'
CATEGORICAL = 'categorical'
KINDS = (NUMERIC, CATEGORICAL)


@dataclass(frozen=True)
class ObservationTable:
    """
    Immutable column store of observations.

    Construct via factory classmethods, not directly.

    Numeric columns are float64 arrays using NaN as the missing marker.
    Categorical columns are object arrays using None as the missing marker.
    """
    _columns: tuple[str, ...]
    _kinds: dict[str, str]
    _data: dict[str, NDArray]
    _n: int
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Column Access ===

    @property
    def columns(self) -> tuple[str, ...]:
        """Ordered column names."""
        return self._columns

    @property
    def n_rows(self) -> int:
        """Number of rows, including rows with missing cells."""
        return self._n

    @property
    def metadata(self) -> dict[str, Any]:
        return dict(self._metadata)

    def kind(self, name: str) -> str:
        """Declared kind of a column: 'numeric' or 'categorical'."""
        self._require(name)
        return self._kinds[name]

    def __getitem__(self, name: str) -> NDArray:
        """
        Access a column array.

        Raises:
            SchemaError: If the column does not exist, listing available names
        """
        self._require(name)
        return self._data[name]

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def __len__(self) -> int:
        return self._n

    def missing(self, name: str) -> NDArray[np.bool_]:
        """Boolean mask of rows where the column is missing."""
        col = self[name]
        if self._kinds[name] == NUMERIC:
            return np.isnan(col)
        return np.array([v is None for v in col], dtype=bool)

    def rows(self) -> Iterator[dict[str, Any]]:
        """
        Iterate rows as dicts in column order.

        Missing cells are reported as None regardless of column kind.
        """
        masks = {name: self.missing(name) for name in self._columns}
        for i in range(self._n):
            row: dict[str, Any] = {}
            for name in self._columns:
                if masks[name][i]:
                    row[name] = None
                elif self._kinds[name] == NUMERIC:
                    row[name] = float(self._data[name][i])
                else:
                    row[name] = self._data[name][i]
            yield row

    def _require(self, name: str) -> None:
        if name not in self._data:
            raise SchemaError(
                f"Observation table has no column {name!r}. Available: {list(self._columns)}",
                column=name,
                available=self._columns,
            )

    def __repr__(self) -> str:
        return f"ObservationTable(n_rows={self._n}, columns={list(self._columns)})"

    # === Factory Methods ===

    @classmethod
    def from_columns(
        cls,
        columns: Mapping[str, Sequence[Any] | NDArray],
        *,
        kinds: Mapping[str, str] | None = None,
    ) -> ObservationTable:
        """
        Construct from a mapping of column name to values.

        Args:
            columns: Column name -> sequence of cell values. None, NaN and
                pandas.NA all mark a missing cell.
            kinds: Optional declared kinds. Columns not listed are inferred:
                numeric if every non-missing cell is a real number,
                categorical otherwise.

        Raises:
            DimensionError: If columns have different lengths
            ValidationError: If a declared numeric column holds non-numeric values
        """
        kinds = dict(kinds or {})
        unknown = set(kinds) - set(columns)
        if unknown:
            raise SchemaError(
                f"kinds given for unknown columns: {sorted(unknown)}",
                column=sorted(unknown)[0],
                available=tuple(columns),
            )

        names = tuple(columns)
        lengths = {name: len(values) for name, values in columns.items()}
        if len(set(lengths.values())) > 1:
            details = ", ".join(f"{k}={v}" for k, v in lengths.items())
            raise DimensionError(f"Inconsistent column lengths: {details}")
        n = next(iter(lengths.values()), 0)

        data: dict[str, NDArray] = {}
        resolved: dict[str, str] = {}
        for name in names:
            values = list(columns[name])
            kind = kinds.get(name) or _infer_kind(values)
            if kind not in KINDS:
                raise ValidationError(f"{name}: unknown kind {kind!r}, expected one of {KINDS}")
            resolved[name] = kind
            if kind == NUMERIC:
                data[name] = _to_numeric(values, name)
            else:
                data[name] = _to_categorical(values)

        return cls(
            _columns=names,
            _kinds=resolved,
            _data=data,
            _n=n,
            _metadata={'source': 'columns'},
        )

    @classmethod
    def from_records(
        cls,
        records: Sequence[Mapping[str, Any]],
        *,
        kinds: Mapping[str, str] | None = None,
    ) -> ObservationTable:
        """
        Construct from a sequence of row mappings.

        Column order follows first appearance. A key absent from a row is
        treated as a missing cell.
        """
        names: list[str] = []
        for record in records:
            for key in record:
                if key not in names:
                    names.append(key)
        columns = {name: [record.get(name) for record in records] for name in names}
        table = cls.from_columns(columns, kinds=kinds)
        return cls(
            _columns=table._columns,
            _kinds=table._kinds,
            _data=table._data,
            _n=table._n,
            _metadata={'source': 'records'},
        )

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        *,
        kinds: Mapping[str, str] | None = None,
        source_path: str | None = None,
    ) -> ObservationTable:
        """Construct from a pandas DataFrame, reading kinds from dtypes."""
        kinds = dict(kinds or {})
        columns: dict[str, list[Any]] = {}
        for col in df.columns:
            series = df[col]
            name = str(col)
            if name not in kinds:
                numeric = (
                    pd.api.types.is_numeric_dtype(series.dtype)
                    and not pd.api.types.is_bool_dtype(series.dtype)
                )
                kinds[name] = NUMERIC if numeric else CATEGORICAL
            columns[name] = series.tolist()

        table = cls.from_columns(columns, kinds=kinds)
        metadata: dict[str, Any] = {'source': 'dataframe'}
        if source_path:
            metadata['source_path'] = source_path
        return cls(
            _columns=table._columns,
            _kinds=table._kinds,
            _data=table._data,
            _n=table._n,
            _metadata=metadata,
        )

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        columns: list[str] | None = None,
        kinds: Mapping[str, str] | None = None,
    ) -> ObservationTable:
        """Construct from a delimited text file with a header row (CSV, TSV)."""
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix == '.csv':
            df = pd.read_csv(path, usecols=columns)
        elif suffix == '.tsv':
            df = pd.read_csv(path, sep='\t', usecols=columns)
        else:
            raise ValidationError(f"Unknown file format: {suffix}")
        return cls.from_dataframe(df, kinds=kinds, source_path=str(path))


def is_missing(value: Any) -> bool:
    """True for None, NaN and pandas missing scalars."""
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _infer_kind(values: list[Any]) -> str:
    present = [v for v in values if not is_missing(v)]
    if present and all(
        isinstance(v, numbers.Real) and not isinstance(v, (bool, np.bool_)) for v in present
    ):
        return NUMERIC
    if not present:
        return NUMERIC
    return CATEGORICAL


def _to_numeric(values: list[Any], name: str) -> NDArray[np.floating[Any]]:
    out = np.empty(len(values), dtype=np.float64)
    for i, v in enumerate(values):
        if is_missing(v):
            out[i] = np.nan
            continue
        if isinstance(v, (bool, np.bool_)) or not isinstance(v, numbers.Real):
            raise ValidationError(
                f"{name}: row {i} holds non-numeric value {v!r} in a numeric column"
            )
        out[i] = float(v)
    return out


def _to_categorical(values: list[Any]) -> NDArray:
    out = np.empty(len(values), dtype=object)
    for i, v in enumerate(values):
        out[i] = None if is_missing(v) else v
    return out
