from rulebook.index.base import IVectorIndex, QueryHit
from rulebook.index.factory import create_vector_index
from rulebook.index.filters import Predicate, matches, translate_filters
from rulebook.index.memory import MemoryVectorIndex
from rulebook.index.projection import AttributeRecord, project, reconstruct

__all__ = [
    "AttributeRecord",
    "IVectorIndex",
    "MemoryVectorIndex",
    "Predicate",
    "QueryHit",
    "create_vector_index",
    "matches",
    "project",
    "reconstruct",
    "translate_filters",
]
