from .api import KeyStore, make_store

__all__ = ["KeyStore", "make_store"]
