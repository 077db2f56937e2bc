"""Core building blocks: cache, auth, errors, logging and database."""
