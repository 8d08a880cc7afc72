"""
Breakdown Models
Request and response models for the AI task breakdown endpoint
"""
from pydantic import BaseModel, Field
from typing import Optional, List

from vibesana.models import Task


class TaskBreakdownRequest(BaseModel):
    """Request model for breaking a project description into tasks"""
    description: Optional[str] = Field(
        None,
        description="Free-text project description to break down",
        example="Build a login page"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "description": "Build a login page with email/password and a forgot-password flow"
            }
        }


class TaskBreakdownResponse(BaseModel):
    """Response model for a successful breakdown"""
    tasks: List[Task] = Field(..., description="Generated tasks, all with status 'todo'")


class ErrorResponse(BaseModel):
    """Response model for any failed breakdown request"""
    error: str = Field(..., description="Error message")
    tasks: List[Task] = Field(default_factory=list, description="Always empty on error")
