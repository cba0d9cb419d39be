"""FastAPI application for the playbook editor."""
