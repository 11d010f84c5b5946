"""Record adapters - Implementations of MapRecordRepositoryPort.

Available implementations:
- CSVMapRecordRepository: Loads records from CSV files
- InMemoryMapRecordRepository: Holds records supplied by the caller
"""

from .csv_repository import CSVMapRecordRepository
from .memory_repository import InMemoryMapRecordRepository

__all__ = ["CSVMapRecordRepository", "InMemoryMapRecordRepository"]
