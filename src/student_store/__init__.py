"""Student Store API.

A single FastAPI service exposing student registration, login, update and
delete operations together with product listings, backed by one relational
store.
"""

__version__ = "0.1.0"
