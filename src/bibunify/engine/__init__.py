"""Run configuration.

This package provides the configuration object threaded through the merge
and the result type of a complete file-to-file run.
"""

from bibunify.engine.config import UnifyConfig, UnifyRunResult

__all__ = [
    "UnifyConfig",
    "UnifyRunResult",
]
