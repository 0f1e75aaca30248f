"""Sales conversation ingestion and audit service."""
