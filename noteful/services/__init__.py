"""
Noteful API: Services Layer
===========================

What:  Business logic between routes (HTTP) and the database.
How:   Services are stateless singletons; every call receives the request's
       AsyncSession, so tests can hand in a mock or a SQLite-backed session.

Service Inventory:
    - NamedResourceService: shared CRUD for `{id, name}` tables
    - FolderService / TagService: folders and tags
    - NoteService: notes with joins, filters and tag-set replacement
    - hydrate_notes(): folds joined rows into nested note objects
"""
