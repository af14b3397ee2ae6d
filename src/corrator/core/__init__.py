"""Core audit pipeline for corrator."""

from corrator.core.extract import extract_version
from corrator.core.cache import EolCache, cache_key, default_cache_dir
from corrator.core.eol import EolResolver, normalize_version
from corrator.core.worker import ContainerWorker
from corrator.core.orchestrator import Orchestrator, ResultCollector, filter_containers, run

__all__ = [
    "extract_version",
    "EolCache",
    "cache_key",
    "default_cache_dir",
    "EolResolver",
    "normalize_version",
    "ContainerWorker",
    "Orchestrator",
    "ResultCollector",
    "filter_containers",
    "run",
]
