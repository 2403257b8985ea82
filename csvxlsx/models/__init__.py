"""Domain models for the CSV -> XLSX converter.

This package contains the domain model classes shared by the reader, the
formatting pipeline, the workbook writer and the batch orchestration.
"""

from .cell import ColumnClassification, FormattedCell, Treatment
from .cell_warning import CellWarning
from .conversion import ConversionOutcome, FileStatus
from .processing_result import FileStat, ProcessingResult
from .table_data import TableData

__all__ = [
    # Cell models
    "Treatment",
    "FormattedCell",
    "ColumnClassification",
    "CellWarning",
    # Input models
    "TableData",
    # Processing models
    "ConversionOutcome",
    "FileStatus",
    "FileStat",
    "ProcessingResult",
]
