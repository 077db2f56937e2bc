"""User directory: model, schemas and repository."""
