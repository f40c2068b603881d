from __future__ import annotations

from typing import Any, ClassVar, Type, Iterable, Mapping
import logging
from abc import ABC, abstractmethod

import pandas as pd
from pydantic import ValidationError

from ..utils.errors import DataValidationError
from ..ranking.candidates import Candidate
from .location import CandidateRecord

logger = logging.getLogger('CandidateLoader')


class CandidateLoader(ABC):
    """Abstract base for candidate loaders.

    Subclasses set a SOURCE and implement `_load_raw()` returning a
    DataFrame or an iterable of mappings with name/street/city/state/zip.

    Usage:
        candidates = CandidateLoader.from_source('csv', path='locations.csv')
        candidates = CandidateLoader.from_source('records', records=rows)
    """

    # Unique key for each subclass (e.g., 'csv', 'records')
    SOURCE: ClassVar[str]

    # Global registry of source loaders
    _REGISTRY: ClassVar[dict[str, Type['CandidateLoader']]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        # Only register classes that define SOURCE themselves
        if "SOURCE" in cls.__dict__:
            key = str(cls.SOURCE).lower()
            if key in CandidateLoader._REGISTRY and CandidateLoader._REGISTRY[key] is not cls:
                raise RuntimeError(f"Duplicate loader SOURCE '{key}' for {cls.__name__}")
            CandidateLoader._REGISTRY[key] = cls
            logger.debug(f"Registered CandidateLoader: {cls.__name__} as '{key}'")

    @classmethod
    def from_source(cls, source: str, **kwargs: Any) -> list[Candidate]:
        """Factory to load candidates from a registered source.

        Args:
            source: The source identifier (e.g., 'csv', 'records')
            **kwargs: Arguments passed to the loader's constructor

        Returns:
            Candidates with ids assigned in source order
        """
        key = str(source).lower()
        try:
            loader_cls = cls._REGISTRY[key]
        except KeyError as e:
            raise ValueError(
                f"Unknown source '{source}'. "
                f"Known sources: {sorted(cls._REGISTRY.keys())}"
            ) from e

        return loader_cls(**kwargs).load()

    def load(self) -> list[Candidate]:
        """Load, validate and number the records."""
        raw = self._load_raw()
        records = self._validate_records(raw)

        blank = [idx for idx, rec in enumerate(records) if rec.is_blank()]
        if blank:
            logger.warning(f"{len(blank)} records from '{self.SOURCE}' have no name or address: rows {blank}")

        candidates = [
            Candidate(id=idx, name=rec.name, address=rec.to_address())
            for idx, rec in enumerate(records)
        ]
        logger.info(f"Loaded {len(candidates)} candidates from '{self.SOURCE}'")
        return candidates

    def _validate_records(self, raw: pd.DataFrame | Iterable[Mapping[str, Any]]) -> list[CandidateRecord]:
        """Validate rows with the CandidateRecord model."""
        if isinstance(raw, pd.DataFrame):
            rows = raw.to_dict(orient='records')
        else:
            rows = [dict(r) for r in raw]

        records = []
        errors = []
        for idx, row in enumerate(rows):
            try:
                records.append(CandidateRecord.model_validate(row))
            except ValidationError as e:
                for err in e.errors():
                    errors.append({**err, 'loc': (idx, *err.get('loc', ()))})

        if errors:
            logger.error(
                f'Validation of {len(rows)} rows failed',
                extra={'source': self.SOURCE, 'error_count': len(errors)}
            )
            raise DataValidationError(self.SOURCE, errors)
        return records

    @abstractmethod
    def _load_raw(self) -> pd.DataFrame | Iterable[Mapping[str, Any]]:
        ...
