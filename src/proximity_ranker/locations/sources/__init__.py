from .records import RecordsLoader
from .csv_file import CSVLoader

__all__ = ['RecordsLoader', 'CSVLoader']
