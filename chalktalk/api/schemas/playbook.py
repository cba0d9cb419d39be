"""
Pydantic schemas for the playbook editor API.

Requests carry drawing-space pixel coordinates; enum fields are
validated here so unknown roles, presets or layers are rejected with a
422 before they reach the core.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from chalktalk.core.enums import FormationSide, Role, RouteLayer, RoutePreset
from chalktalk.core.models import Point


class PointSchema(BaseModel):
    """A drawing-space point in pixels."""
    x: float
    y: float

    def to_point(self) -> Point:
        return Point(self.x, self.y)


# =============================================================================
# Playbooks
# =============================================================================

class CreatePlaybookRequest(BaseModel):
    name: str = Field(default="New Playbook", min_length=1)


class RenameRequest(BaseModel):
    name: str = Field(..., min_length=1)


class SelectPlaybookRequest(BaseModel):
    playbook_id: str


class PlaybookSummary(BaseModel):
    """Playbook row for the playbook picker."""
    id: str
    name: str
    play_count: int
    is_current: bool
    updated_at: str


class PlaybookListResponse(BaseModel):
    current_playbook_id: str
    playbooks: List[PlaybookSummary]


class CellAssignmentRequest(BaseModel):
    row: int = Field(..., ge=0)
    column: int = Field(..., ge=0)


class ColumnRequest(BaseModel):
    name: Optional[str] = None


class ActionReportResponse(BaseModel):
    success: bool
    message: str


# =============================================================================
# Plays & Players
# =============================================================================

class CreatePlayRequest(BaseModel):
    name: Optional[str] = None


class UpdatePlayRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    ball_position: Optional[PointSchema] = None


class FormationRequest(BaseModel):
    side: FormationSide


class UpdatePlayerRequest(BaseModel):
    label: Optional[str] = None
    color: Optional[str] = None


class MovePlayerRequest(BaseModel):
    position: PointSchema


class RoleRequest(BaseModel):
    role: Role


class MotionRequest(BaseModel):
    target_player_id: str


class RoutePresetRequest(BaseModel):
    preset: RoutePreset
    layer: RouteLayer = RouteLayer.PRIMARY


class DrawnRouteRequest(BaseModel):
    points: List[PointSchema] = Field(..., min_length=2)


# =============================================================================
# Editor Session
# =============================================================================

class SelectRequest(BaseModel):
    id: Optional[str] = None


class LayerRequest(BaseModel):
    layer: RouteLayer


class KeyRequest(BaseModel):
    key: str = Field(..., description="'Enter' or 'Escape'")
