from .search import KnowledgeRetriever

__all__ = ["KnowledgeRetriever"]
