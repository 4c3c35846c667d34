"""Core modules for kvvector.

Each module is self-contained with its own schemas, services and
exceptions: documents (data model), distance (scoring) and store
(index bookkeeping and the query pipeline).
"""
