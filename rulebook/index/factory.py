from rulebook.errors import UnsupportedIndexBackendError
from rulebook.index.base import IVectorIndex
from rulebook.index.memory import MemoryVectorIndex
from rulebook.settings import Settings


def create_vector_index(settings: Settings) -> IVectorIndex:
    backend = settings.RULES_INDEX_BACKEND.lower()
    if backend == "chroma":
        from rulebook.index.chroma import ChromaVectorIndex

        return ChromaVectorIndex(path=settings.RULES_DB_PATH)
    if backend == "memory":
        return MemoryVectorIndex()
    raise UnsupportedIndexBackendError(settings.RULES_INDEX_BACKEND)
