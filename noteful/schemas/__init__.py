"""
Noteful API: Pydantic Request/Response Schemas
==============================================

Schemas are separate from the SQLAlchemy models: they define the JSON
contract (camelCase keys such as `folderId`) while the models define the
table layout (snake_case columns such as `folder_id`).
"""
