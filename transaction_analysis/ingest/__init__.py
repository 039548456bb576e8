"""Loading of transaction datasets into in-memory ``Transaction`` records."""

from .utils import load_transactions

__all__ = ["load_transactions"]
