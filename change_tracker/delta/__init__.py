"""Delta engine: structural, move-aware diffs in the jsondiffpatch format.

Submodules:
    engine -- DeltaEngine and the delta encoding constants.
    lcs    -- Longest common subsequence used to align array middles.
"""

from change_tracker.delta.engine import (
    ARRAY_MARKER,
    ARRAY_MARKER_KEY,
    DELETED,
    MISSING,
    MOVED,
    DeltaEngine,
)

__all__ = [
    "ARRAY_MARKER",
    "ARRAY_MARKER_KEY",
    "DELETED",
    "MISSING",
    "MOVED",
    "DeltaEngine",
]
