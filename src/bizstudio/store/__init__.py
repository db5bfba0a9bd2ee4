"""Entity store -- in-memory typed collections for every entity.

Provides Store (one collection per entity type), the generic
AppendOnlyCollection/EntityCollection building blocks, and the typed
collections with their filtered queries.
"""
