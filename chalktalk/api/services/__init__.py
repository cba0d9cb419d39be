"""API service layer."""

from chalktalk.api.services.editor_service import EditorSessionManager, editor_session_manager

__all__ = ["EditorSessionManager", "editor_session_manager"]
