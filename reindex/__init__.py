"""
reindex - build or rebuild search indexes for domain objects.

Resolves objects by name, by type or all at once, and dispatches each one
for indexing either inline in this process or through a deferred queue.
"""
__version__ = "0.1.0"
