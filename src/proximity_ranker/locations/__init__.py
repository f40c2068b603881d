"""Candidate loaders for ingestion sources.

This module automatically imports all sources to register them.
"""

from .loader import CandidateLoader
from .location import CandidateRecord
from . import sources

__all__ = ['CandidateLoader', 'CandidateRecord', 'sources']
