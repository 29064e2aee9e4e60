"""Use-case layer for dashboard mutations and widget workflows.

Each module coordinates domain objects and ports without performing transport
I/O directly. Mutating use cases validate first, then change the state held
by the ``StateContainer`` and persist it; a ``StoreError`` raised afterwards
means the change is kept in memory but was not saved.
"""
