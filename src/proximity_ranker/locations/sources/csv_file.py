from pathlib import Path

import pandas as pd

from ..loader import CandidateLoader


class CSVLoader(CandidateLoader):
    """CSV with columns name, street, city, state, zip (or address_line2)."""
    SOURCE = 'csv'

    def __init__(self, path: str | Path, *, encoding: str | None = None) -> None:
        self.path = Path(path)
        self.encoding = encoding

    def _load_raw(self):
        df = pd.read_csv(self.path, dtype=str, keep_default_na=False, encoding=self.encoding)
        df.columns = [str(c).strip().lower() for c in df.columns]
        return df
