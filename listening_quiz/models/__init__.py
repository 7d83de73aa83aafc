from listening_quiz.models.storage import StorageEntry

__all__ = ["StorageEntry"]
