"""Pydantic schemas for API request/response models."""

from chalktalk.api.schemas.playbook import (
    ActionReportResponse,
    CellAssignmentRequest,
    ColumnRequest,
    CreatePlaybookRequest,
    CreatePlayRequest,
    DrawnRouteRequest,
    FormationRequest,
    KeyRequest,
    LayerRequest,
    MotionRequest,
    MovePlayerRequest,
    PlaybookListResponse,
    PlaybookSummary,
    PointSchema,
    RenameRequest,
    RoleRequest,
    RoutePresetRequest,
    SelectPlaybookRequest,
    SelectRequest,
    UpdatePlayerRequest,
    UpdatePlayRequest,
)

__all__ = [
    "ActionReportResponse",
    "CellAssignmentRequest",
    "ColumnRequest",
    "CreatePlaybookRequest",
    "CreatePlayRequest",
    "DrawnRouteRequest",
    "FormationRequest",
    "KeyRequest",
    "LayerRequest",
    "MotionRequest",
    "MovePlayerRequest",
    "PlaybookListResponse",
    "PlaybookSummary",
    "PointSchema",
    "RenameRequest",
    "RoleRequest",
    "RoutePresetRequest",
    "SelectPlaybookRequest",
    "SelectRequest",
    "UpdatePlayerRequest",
    "UpdatePlayRequest",
]
