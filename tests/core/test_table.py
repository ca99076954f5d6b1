"""
Tests for ObservationTable.

Validates:
    - Kind inference and explicit kinds
    - Missing-value markers (None, NaN, pandas.NA) for both kinds
    - Row iteration
    - DataFrame and CSV construction
    - SchemaError on unknown columns
"""

import numpy as np
import pandas as pd
import pytest

from olstoolkit.core.exceptions import DimensionError, SchemaError, ValidationError
from olstoolkit.core.table import ObservationTable, NUMERIC, CATEGORICAL


class TestFromColumns:

    def test_kind_inference(self):
        table = ObservationTable.from_columns({
            "y": [1.0, 2.0, 3.0],
            "n": [1, 2, 3],
            "race": ["White", "Black", "Other"],
        })
        assert table.columns == ("y", "n", "race")
        assert table.kind("y") == NUMERIC
        assert table.kind("n") == NUMERIC
        assert table.kind("race") == CATEGORICAL
        assert table.n_rows == 3
        assert table["n"].dtype == np.float64

    def test_numpy_columns(self):
        table = ObservationTable.from_columns({"x": np.arange(4.0), "g": np.array(["a", "b", "a", "b"])})
        assert table.kind("x") == NUMERIC
        assert table.kind("g") == CATEGORICAL

    def test_explicit_kind_for_numeric_labels(self):
        table = ObservationTable.from_columns(
            {"grade": [1, 2, 3]}, kinds={"grade": "categorical"}
        )
        assert table.kind("grade") == CATEGORICAL

    def test_missing_markers(self):
        table = ObservationTable.from_columns({
            "x": [1.0, None, np.nan, 4.0],
            "g": ["a", None, "b", pd.NA],
        })
        np.testing.assert_array_equal(table.missing("x"), [False, True, True, False])
        np.testing.assert_array_equal(table.missing("g"), [False, True, False, True])

    def test_declared_numeric_rejects_strings(self):
        with pytest.raises(ValidationError, match="row 1"):
            ObservationTable.from_columns({"x": [1.0, "two"]}, kinds={"x": "numeric"})

    def test_inconsistent_lengths(self):
        with pytest.raises(DimensionError, match="Inconsistent"):
            ObservationTable.from_columns({"x": [1, 2], "y": [1, 2, 3]})

    def test_unknown_kind(self):
        with pytest.raises(ValidationError, match="unknown kind"):
            ObservationTable.from_columns({"x": [1, 2]}, kinds={"x": "ordinal"})


class TestAccess:

    def test_unknown_column_raises_schema_error(self):
        table = ObservationTable.from_columns({"x": [1.0, 2.0]})
        with pytest.raises(SchemaError, match="no column 'z'") as excinfo:
            table["z"]
        assert excinfo.value.column == "z"
        assert excinfo.value.available == ("x",)

    def test_kind_of_unknown_column(self):
        table = ObservationTable.from_columns({"x": [1.0]})
        with pytest.raises(SchemaError):
            table.kind("y")

    def test_rows_report_none_for_missing(self):
        table = ObservationTable.from_columns({
            "x": [1.0, None],
            "g": [None, "b"],
        })
        rows = list(table.rows())
        assert rows == [{"x": 1.0, "g": None}, {"x": None, "g": "b"}]

    def test_contains_and_len(self):
        table = ObservationTable.from_columns({"x": [1.0, 2.0]})
        assert "x" in table
        assert "y" not in table
        assert len(table) == 2


class TestFromRecords:

    def test_absent_key_is_missing(self):
        table = ObservationTable.from_records([
            {"x": 1.0, "g": "a"},
            {"x": 2.0},
        ])
        assert table.columns == ("x", "g")
        assert table.missing("g").tolist() == [False, True]
        assert table.metadata["source"] == "records"


class TestFromDataFrame:

    def test_dtypes_map_to_kinds(self):
        df = pd.DataFrame({
            "y": [1.0, 2.0, np.nan],
            "race": pd.Categorical(["White", "Black", None]),
            "flag": [True, False, True],
        })
        table = ObservationTable.from_dataframe(df)
        assert table.kind("y") == NUMERIC
        assert table.kind("race") == CATEGORICAL
        assert table.kind("flag") == CATEGORICAL
        assert table.missing("y").tolist() == [False, False, True]
        assert table.missing("race").tolist() == [False, False, True]

    def test_from_csv(self, tmp_path):
        path = tmp_path / "wages.csv"
        path.write_text("wage,educ,race\n10.5,12,White\n12.0,,Black\n9.0,10,Other\n")
        table = ObservationTable.from_file(path)
        assert table.columns == ("wage", "educ", "race")
        assert table.kind("educ") == NUMERIC
        assert table.kind("race") == CATEGORICAL
        assert table.missing("educ").tolist() == [False, True, False]
        assert table.metadata["source_path"] == str(path)

    def test_from_tsv(self, tmp_path):
        path = tmp_path / "data.tsv"
        path.write_text("x\ty\n1\t2\n3\t4\n")
        table = ObservationTable.from_file(path)
        np.testing.assert_array_equal(table["y"], [2.0, 4.0])

    def test_unknown_suffix(self, tmp_path):
        with pytest.raises(ValidationError, match="Unknown file format"):
            ObservationTable.from_file(tmp_path / "data.parquet")
