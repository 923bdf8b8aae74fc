"""
graphmap core naming contracts and annotation defaults.

Notes:
    - The global legacy index names are an external contract shared with the
      stores that already hold data under them. Do not change them.
    - Annotation defaults may be overridden per process through
      graphmap.config.MappingSettings.
"""

from __future__ import annotations

from .grammar import IndexType, Level

__all__ = [
    "NODE_GLOBAL_INDEX_NAME",
    "RELATIONSHIP_GLOBAL_INDEX_NAME",
    "DEFAULT_LEVEL",
    "DEFAULT_INDEX_TYPE",
]

# Legacy index shared by every node entity when an index is declared at GLOBAL level.
NODE_GLOBAL_INDEX_NAME: str = "node"

# Legacy index shared by every relationship entity at GLOBAL level.
RELATIONSHIP_GLOBAL_INDEX_NAME: str = "relationship"

DEFAULT_LEVEL: Level = Level.CLASS
DEFAULT_INDEX_TYPE: IndexType = IndexType.LEGACY
