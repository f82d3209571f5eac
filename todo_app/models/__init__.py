from .storage import StorageEntry

# Export all models for easy importing
__all__ = ["StorageEntry"]
