"""Feature modules: documents, permissions, users, pagination."""
