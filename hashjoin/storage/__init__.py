"""Reading CSV sources and mapping joined column positions."""

from .column_index import ColumnIndex, concatenated_headers, full_column_list
from .csv_table import CsvTable, load_table, read_headers

__all__ = [
    "ColumnIndex",
    "CsvTable",
    "concatenated_headers",
    "full_column_list",
    "load_table",
    "read_headers",
]
