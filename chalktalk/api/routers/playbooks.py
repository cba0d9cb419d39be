"""
Playbooks API Router.

Playbook library management: create, select, rename, copy and delete
playbooks, lay plays out on the call-sheet grid, and move playbooks in
and out as JSON documents.
"""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Response

from chalktalk.api.schemas import (
    ActionReportResponse,
    CellAssignmentRequest,
    ColumnRequest,
    CreatePlaybookRequest,
    PlaybookListResponse,
    PlaybookSummary,
    RenameRequest,
    SelectPlaybookRequest,
)
from chalktalk.api.services import editor_session_manager
from chalktalk.core.playbook import grid_cells


router = APIRouter(prefix="/playbooks", tags=["playbooks"])


def _summaries(session) -> PlaybookListResponse:
    library = session.library
    return PlaybookListResponse(
        current_playbook_id=library.current_playbook_id,
        playbooks=[
            PlaybookSummary(
                id=pb.id,
                name=pb.name,
                play_count=pb.play_count,
                is_current=pb.id == library.current_playbook_id,
                updated_at=pb.updated_at,
            )
            for pb in library.playbooks
        ],
    )


# =============================================================================
# Library
# =============================================================================

@router.get("", response_model=PlaybookListResponse)
def list_playbooks() -> PlaybookListResponse:
    with editor_session_manager.session() as session:
        return _summaries(session)


@router.post("", status_code=201)
def create_playbook(request: CreatePlaybookRequest) -> dict:
    """Create an empty playbook and switch to it."""
    with editor_session_manager.session() as session:
        return session.new_playbook(request.name).to_dict()


@router.get("/current")
def get_current_playbook() -> dict:
    with editor_session_manager.session() as session:
        return session.playbook.to_dict()


@router.post("/select", response_model=PlaybookListResponse)
def select_playbook(request: SelectPlaybookRequest) -> PlaybookListResponse:
    with editor_session_manager.session() as session:
        if not session.select_playbook(request.playbook_id):
            raise HTTPException(status_code=404, detail="Playbook not found")
        return _summaries(session)


@router.patch("/{playbook_id}")
def rename_playbook(playbook_id: str, request: RenameRequest) -> dict:
    with editor_session_manager.session() as session:
        playbook = session.library.get_playbook(playbook_id)
        if playbook is None:
            raise HTTPException(status_code=404, detail="Playbook not found")
        session.rename_playbook(playbook_id, request.name)
        return session.library.get_playbook(playbook_id).to_dict()


@router.post("/{playbook_id}/copy", status_code=201)
def copy_playbook(playbook_id: str) -> dict:
    with editor_session_manager.session() as session:
        duplicate = session.copy_playbook(playbook_id)
        if duplicate is None:
            raise HTTPException(status_code=404, detail="Playbook not found")
        return duplicate.to_dict()


@router.delete("/{playbook_id}", response_model=ActionReportResponse)
def delete_playbook(playbook_id: str) -> ActionReportResponse:
    with editor_session_manager.session() as session:
        if session.library.get_playbook(playbook_id) is None:
            raise HTTPException(status_code=404, detail="Playbook not found")
        report = session.delete_playbook(playbook_id)
        if not report.success:
            raise HTTPException(status_code=400, detail=report.message)
        return ActionReportResponse(success=report.success, message=report.message)


# =============================================================================
# Import / Export
# =============================================================================

@router.get("/current/export")
def export_playbook() -> Response:
    """Download the current playbook as a JSON attachment."""
    with editor_session_manager.session() as session:
        filename, document = session.export_current()
    return Response(
        content=document,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ActionReportResponse)
def import_playbooks(document: Any = Body(...)) -> ActionReportResponse:
    """
    Merge an exported document into the library.

    Accepts a single playbook, a list of playbooks, or a bare list of
    plays (appended to the current playbook).
    """
    with editor_session_manager.session() as session:
        report = session.import_data(document)
    if not report.success:
        raise HTTPException(status_code=400, detail=report.message)
    return ActionReportResponse(success=report.success, message=report.message)


# =============================================================================
# Grid
# =============================================================================

@router.get("/current/grid")
def get_grid() -> dict:
    """Column names and occupied cells of the current playbook."""
    with editor_session_manager.session() as session:
        playbook = session.playbook
        return {
            "columnNames": list(playbook.grid_config.column_names),
            "cells": [
                {"row": row, "column": column, "playId": play.id, "playName": play.name}
                for (row, column), play in sorted(grid_cells(playbook).items())
            ],
            "unplaced": [
                {"playId": play.id, "playName": play.name}
                for play in playbook.plays
                if play.grid_position is None
            ],
        }


@router.put("/current/grid/{play_id}")
def assign_play_to_cell(play_id: str, request: CellAssignmentRequest) -> dict:
    with editor_session_manager.session() as session:
        if not session.playbook.has_play(play_id):
            raise HTTPException(status_code=404, detail="Play not found")
        if request.column >= session.playbook.grid_config.column_count:
            raise HTTPException(status_code=400, detail=f"No column {request.column}")
        session.assign_play_to_cell(play_id, request.row, request.column)
        return session.playbook.get_play(play_id).to_dict()


@router.delete("/current/grid/{play_id}")
def unassign_play(play_id: str) -> dict:
    with editor_session_manager.session() as session:
        if not session.playbook.has_play(play_id):
            raise HTTPException(status_code=404, detail="Play not found")
        session.unassign_play(play_id)
        return session.playbook.get_play(play_id).to_dict()


@router.post("/current/columns", status_code=201)
def add_column(request: ColumnRequest) -> dict:
    with editor_session_manager.session() as session:
        session.add_column(request.name)
        return session.playbook.grid_config.to_dict()


@router.patch("/current/columns/{index}")
def rename_column(index: int, request: RenameRequest) -> dict:
    with editor_session_manager.session() as session:
        if not 0 <= index < session.playbook.grid_config.column_count:
            raise HTTPException(status_code=404, detail=f"No column {index}")
        session.rename_column(index, request.name)
        return session.playbook.grid_config.to_dict()


@router.delete("/current/columns/{index}")
def remove_column(index: int) -> dict:
    with editor_session_manager.session() as session:
        count = session.playbook.grid_config.column_count
        if not 0 <= index < count:
            raise HTTPException(status_code=404, detail=f"No column {index}")
        if count == 1:
            raise HTTPException(status_code=400, detail="Cannot remove the last column")
        session.remove_column(index)
        return session.playbook.grid_config.to_dict()
