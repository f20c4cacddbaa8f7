from clipboard_store.store import ValueStore

__all__ = ["ValueStore"]
__version__ = "0.1.0"
