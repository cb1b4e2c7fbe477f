from .client import HardcoverClient, to_metadata

__all__ = ['HardcoverClient', 'to_metadata']
