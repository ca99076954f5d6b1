"""
Regression Design.

Design reads an ObservationTable through a ModelSpec and produces the
numeric design matrix X, the response y, and the EncodingSchema needed to
lay out new rows identically at prediction time. It knows it is building a
regression; the table doesn't.

Rows with a missing value in the response or any predictor are excluded,
and the exclusion is always reported: the count, the row indices, and the
per-column counts live on the Design, and a MissingDataWarning is emitted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence
import numbers
import warnings

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from olstoolkit.core.exceptions import (
    InsufficientDataError,
    MissingDataWarning,
    SchemaError,
    SchemaMismatchError,
    ValidationError,
)
from olstoolkit.core.table import ObservationTable, NUMERIC, CATEGORICAL, is_missing
from olstoolkit.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
)
from olstoolkit.regression.specification import ModelSpec

INTERCEPT = '(Intercept)'


@dataclass(frozen=True)
class TermEncoding:
    """
    How one predictor maps to design columns.

    Attributes:
        name: Source column name
        kind: 'numeric' or 'categorical'
        columns: Design column names produced by this term
        offset: Subtracted mean for a centered numeric term, else None
        levels: Sorted level labels of a categorical term
        reference: Reference level (absorbed into the intercept)
        source_kind: Kind of the source column; a categorical term on a
            numeric column labels its levels by str(float(value))
    """
    name: str
    kind: str
    columns: tuple[str, ...]
    offset: float | None = None
    levels: tuple[str, ...] = ()
    reference: str | None = None
    source_kind: str = NUMERIC

    @property
    def width(self) -> int:
        return len(self.columns)


@dataclass(frozen=True)
class EncodingSchema:
    """
    Column layout of a design matrix.

    Records everything needed to reproduce the layout for new rows:
    the intercept flag, centering offsets, and categorical reference levels.
    """
    intercept: bool
    terms: tuple[TermEncoding, ...]
    from_arrays: bool = False

    @property
    def column_names(self) -> tuple[str, ...]:
        names: tuple[str, ...] = (INTERCEPT,) if self.intercept else ()
        for term in self.terms:
            names += term.columns
        return names

    @property
    def n_columns(self) -> int:
        return len(self.column_names)

    def term(self, name: str) -> TermEncoding:
        for term in self.terms:
            if term.name == name:
                return term
        raise KeyError(name)

    def encode(self, new_data: Any) -> NDArray[np.floating[Any]]:
        """
        Encode new rows into a design matrix with this layout.

        Args:
            new_data: ObservationTable, mapping of column -> values (or
                scalars for a single row), sequence of row mappings, or a
                2D array when the schema came from Design.from_arrays.

        Returns:
            (m, n_columns) float64 matrix

        Raises:
            SchemaMismatchError: If any row cannot be encoded
        """
        if isinstance(new_data, np.ndarray) or (
            self.from_arrays and _is_nested_numeric(new_data)
        ):
            return self._encode_array(new_data)

        columns, m = _collect_columns(new_data, [t.name for t in self.terms])
        blocks = []
        if self.intercept:
            blocks.append(np.ones((m, 1)))
        for term in self.terms:
            blocks.append(_encode_term(term, columns[term.name]))
        if not blocks:
            return np.empty((m, 0))
        return np.hstack(blocks)

    def _encode_array(self, array: Any) -> NDArray[np.floating[Any]]:
        if not self.from_arrays:
            raise SchemaMismatchError(
                "Array input can only be encoded by a design built from arrays; "
                f"pass named columns {[t.name for t in self.terms]} instead"
            )
        try:
            X = check_array(array, 'new_data')
        except ValidationError as e:
            raise SchemaMismatchError(str(e)) from e
        if X.ndim == 1:
            X = X.reshape(1, -1)
        expected = len(self.terms)
        if X.ndim != 2 or X.shape[1] != expected:
            raise SchemaMismatchError(
                f"new_data: expected {expected} columns, got shape {X.shape}"
            )
        if not np.all(np.isfinite(X)):
            row = int(np.flatnonzero(~np.all(np.isfinite(X), axis=1))[0])
            raise SchemaMismatchError(f"new_data: row {row} has a missing value", row=row)
        if self.intercept:
            X = np.column_stack([np.ones(X.shape[0]), X])
        return X


@dataclass(frozen=True)
class Design:
    """
    Regression design: X, y, and the schema that produced them.

    Immutable after construction.

    Construction:
        Design.from_table(table, spec)   # encode, center, drop incomplete rows
        Design.from_arrays(X, y)         # numeric matrix used as-is
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _schema: EncodingSchema
    _response: str = 'y'
    _dropped_rows: tuple[int, ...] = ()
    _dropped_by_column: dict[str, int] = field(default_factory=dict)
    _warnings: tuple[str, ...] = ()
    _source: ObservationTable | None = None

    @classmethod
    def from_table(cls, table: ObservationTable, spec: ModelSpec) -> Design:
        """
        Build a design from an observation table.

        Dropped rows are reported with a MissingDataWarning pointing at the
        caller, and recorded on Design.warnings.

        Args:
            table: The observations
            spec: Response, ordered terms and intercept flag

        Returns:
            Design ready for fitting

        Raises:
            SchemaError: If a named column is absent or has an unusable kind
            InsufficientDataError: If fewer complete rows remain than columns
            ValidationError: If a categorical term has fewer than two levels
        """
        design = cls._build(table, spec)
        for message in design.warnings:
            warnings.warn(message, MissingDataWarning, stacklevel=2)
        return design

    @classmethod
    def _build(cls, table: ObservationTable, spec: ModelSpec) -> Design:
        """Encode the table without emitting warnings."""
        if table.kind(spec.response) != NUMERIC:
            raise SchemaError(
                f"response {spec.response!r} is categorical; a numeric response is required",
                column=spec.response,
            )
        for term in spec.terms:
            if term.kind == NUMERIC and table.kind(term.name) != NUMERIC:
                raise SchemaError(
                    f"{term.name}: column is categorical but the term is numeric",
                    column=term.name,
                )

        # === Missing rows ===
        missing_by_column = {name: table.missing(name) for name in spec.required_columns}
        any_missing = np.zeros(table.n_rows, dtype=bool)
        for mask in missing_by_column.values():
            any_missing |= mask
        keep = ~any_missing
        dropped_rows = tuple(int(i) for i in np.flatnonzero(any_missing))
        dropped_by_column = {
            name: int(mask.sum()) for name, mask in missing_by_column.items() if mask.any()
        }
        n_complete = int(keep.sum())

        p_min = int(spec.intercept) + len(spec.terms)
        if n_complete == 0:
            raise InsufficientDataError(
                f"No complete rows remain after dropping {len(dropped_rows)} "
                f"rows with missing values",
                n_complete=0,
                n_required=max(p_min, 1),
                n_dropped=len(dropped_rows),
            )

        # === Term encodings from complete rows ===
        encodings = []
        for term in spec.terms:
            values = table[term.name][keep]
            if term.kind == NUMERIC:
                offset = float(np.mean(values)) if term.center else None
                encodings.append(TermEncoding(
                    name=term.name, kind=NUMERIC, columns=(term.name,), offset=offset,
                ))
            else:
                source_kind = table.kind(term.name)
                labels = sorted({_label(v, source_kind) for v in values})
                if len(labels) < 2:
                    raise ValidationError(
                        f"{term.name}: need at least 2 levels among complete rows, "
                        f"got {labels}"
                    )
                encodings.append(TermEncoding(
                    name=term.name,
                    kind=CATEGORICAL,
                    columns=tuple(f"{term.name}[{level}]" for level in labels[1:]),
                    levels=tuple(labels),
                    reference=labels[0],
                    source_kind=source_kind,
                ))
        schema = EncodingSchema(intercept=spec.intercept, terms=tuple(encodings))

        p = schema.n_columns
        if n_complete < p:
            raise InsufficientDataError(
                f"{n_complete} complete rows remain (dropped {len(dropped_rows)}) "
                f"but the design has {p} columns",
                n_complete=n_complete,
                n_required=p,
                n_dropped=len(dropped_rows),
            )

        columns = {t.name: list(table[t.name][keep]) for t in spec.terms}
        X = schema.encode(columns) if spec.terms else np.ones((n_complete, 1))
        y = table[spec.response][keep]

        messages: tuple[str, ...] = ()
        if dropped_rows:
            details = ", ".join(f"{k}={v}" for k, v in dropped_by_column.items())
            message = (
                f"Dropped {len(dropped_rows)} of {table.n_rows} rows with missing "
                f"values ({details})"
            )
            messages = (message,)

        return cls(
            _X=X,
            _y=np.asarray(y, dtype=np.float64),
            _schema=schema,
            _response=spec.response,
            _dropped_rows=dropped_rows,
            _dropped_by_column=dropped_by_column,
            _warnings=messages,
            _source=table,
        )

    @classmethod
    def from_arrays(
        cls,
        X: Any,
        y: Any,
        *,
        column_names: Sequence[str] | None = None,
        add_intercept: bool = False,
    ) -> Design:
        """
        Build a design directly from numeric arrays.

        X is used as given unless add_intercept is set, in which case a
        leading column of ones is prepended and the design is treated as
        having an intercept. No rows are dropped; non-finite values are
        rejected.
        """
        X = check_array(X, 'X')
        y = check_array(y, 'y')
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        check_2d(X, 'X')
        check_1d(y, 'y')
        check_finite(X, 'X')
        check_finite(y, 'y')
        check_consistent_length(X, y, names=('X', 'y'))

        n, k = X.shape
        names = tuple(column_names) if column_names is not None else tuple(
            f"x{j}" for j in range(k)
        )
        if len(names) != k:
            raise ValidationError(
                f"column_names: expected {k} names, got {len(names)}"
            )
        if add_intercept:
            X = np.column_stack([np.ones(n), X])

        p = X.shape[1]
        if n < p:
            raise InsufficientDataError(
                f"X: {n} rows but {p} columns",
                n_complete=n,
                n_required=p,
            )

        schema = EncodingSchema(
            intercept=bool(add_intercept),
            terms=tuple(TermEncoding(name=nm, kind=NUMERIC, columns=(nm,)) for nm in names),
            from_arrays=True,
        )
        return cls(_X=X, _y=y, _schema=schema)

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations used."""
        return self._X.shape[0]

    @property
    def p(self) -> int:
        """Number of design columns."""
        return self._X.shape[1]

    @property
    def schema(self) -> EncodingSchema:
        return self._schema

    @property
    def column_names(self) -> tuple[str, ...]:
        return self._schema.column_names

    @property
    def response(self) -> str:
        return self._response

    @property
    def has_intercept(self) -> bool:
        return self._schema.intercept

    @property
    def n_dropped(self) -> int:
        """Number of rows excluded because of missing values."""
        return len(self._dropped_rows)

    @property
    def dropped_rows(self) -> tuple[int, ...]:
        """Indices (in the source table) of the excluded rows."""
        return self._dropped_rows

    @property
    def dropped_by_column(self) -> dict[str, int]:
        """Column name -> number of rows missing that column (rows may count twice)."""
        return dict(self._dropped_by_column)

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._warnings

    @property
    def source(self) -> ObservationTable | None:
        """Original table, if available."""
        return self._source

    def __repr__(self) -> str:
        return f"Design(n={self.n}, p={self.p}, n_dropped={self.n_dropped})"


def _label(value: Any, source_kind: str = CATEGORICAL) -> str:
    if source_kind == NUMERIC:
        return str(float(value))
    return value if isinstance(value, str) else str(value)


def _is_nested_numeric(data: Any) -> bool:
    """True for list-of-lists style numeric input."""
    if isinstance(data, (Mapping, ObservationTable, str)):
        return False
    if not isinstance(data, Sequence) or not data:
        return False
    first = data[0]
    return isinstance(first, (Sequence, np.ndarray, numbers.Real)) and not isinstance(
        first, (str, Mapping)
    )


def _collect_columns(
    new_data: Any,
    names: list[str],
) -> tuple[dict[str, list[Any]], int]:
    """Gather the named columns from any supported input as lists of cells."""
    if isinstance(new_data, pd.DataFrame):
        new_data = {str(c): new_data[c].tolist() for c in new_data.columns}

    if isinstance(new_data, ObservationTable):
        columns = {}
        for name in names:
            if name not in new_data:
                raise SchemaMismatchError(
                    f"new_data has no column {name!r}", column=name
                )
            col = new_data[name]
            mask = new_data.missing(name)
            columns[name] = [None if mask[i] else col[i] for i in range(len(col))]
        return columns, new_data.n_rows

    if isinstance(new_data, Mapping):
        columns = {}
        for name in names:
            if name not in new_data:
                raise SchemaMismatchError(
                    f"new_data has no column {name!r}", column=name
                )
            values = new_data[name]
            if isinstance(values, (str, numbers.Number)) or values is None:
                values = [values]
            columns[name] = list(values)
        lengths = {len(v) for v in columns.values()}
        if len(lengths) > 1:
            raise SchemaMismatchError(f"new_data: inconsistent column lengths {sorted(lengths)}")
        m = lengths.pop() if lengths else 1
        return columns, m

    if isinstance(new_data, Sequence) and not isinstance(new_data, str):
        rows = list(new_data)
        columns = {name: [] for name in names}
        for i, row in enumerate(rows):
            if not isinstance(row, Mapping):
                raise SchemaMismatchError(
                    f"new_data: row {i} is {type(row).__name__}, expected a mapping", row=i
                )
            for name in names:
                if name not in row:
                    raise SchemaMismatchError(
                        f"new_data: row {i} has no column {name!r}", column=name, row=i
                    )
                columns[name].append(row[name])
        return columns, len(rows)

    raise SchemaMismatchError(
        f"new_data: unsupported input type {type(new_data).__name__}"
    )


def _encode_term(term: TermEncoding, values: list[Any]) -> NDArray[np.floating[Any]]:
    """Encode one term's cells into its design columns."""
    m = len(values)
    if term.kind == NUMERIC:
        out = np.empty((m, 1), dtype=np.float64)
        for i, v in enumerate(values):
            if is_missing(v):
                raise SchemaMismatchError(
                    f"{term.name}: row {i} is missing", column=term.name, row=i
                )
            if isinstance(v, (bool, np.bool_)) or not isinstance(v, numbers.Real):
                raise SchemaMismatchError(
                    f"{term.name}: row {i} holds non-numeric value {v!r}",
                    column=term.name,
                    row=i,
                )
            out[i, 0] = float(v)
        if term.offset is not None:
            out -= term.offset
        return out

    out = np.zeros((m, term.width), dtype=np.float64)
    indicator_levels = term.levels[1:]
    for i, v in enumerate(values):
        if is_missing(v):
            raise SchemaMismatchError(
                f"{term.name}: row {i} is missing", column=term.name, row=i
            )
        if term.source_kind == NUMERIC and (
            isinstance(v, (bool, np.bool_)) or not isinstance(v, numbers.Real)
        ):
            raise SchemaMismatchError(
                f"{term.name}: row {i} holds non-numeric value {v!r}",
                column=term.name,
                row=i,
            )
        label = _label(v, term.source_kind)
        if label not in term.levels:
            raise SchemaMismatchError(
                f"{term.name}: row {i} has level {label!r} not seen when fitting "
                f"(levels: {list(term.levels)})",
                column=term.name,
                row=i,
            )
        if label != term.reference:
            out[i, indicator_levels.index(label)] = 1.0
    return out
