from typing import Any, Iterable, Mapping

from ..loader import CandidateLoader


class RecordsLoader(CandidateLoader):
    """Records already extracted in memory (e.g. scraped from a page)."""
    SOURCE = 'records'

    def __init__(self, records: Iterable[Mapping[str, Any]]) -> None:
        self.records = records

    def _load_raw(self):
        return list(self.records)
