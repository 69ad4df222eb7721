"""Workspace service."""

from workspace.service import EditorService, WorkspaceError

__all__ = ["EditorService", "WorkspaceError"]
