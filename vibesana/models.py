from enum import Enum
from typing import Optional, List, Literal
from pydantic import BaseModel, Field, validator


INITIAL_TASK_STATUS = "todo"


class TaskPriority(str, Enum):
    """Priority levels a generated task can carry"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(BaseModel):
    """A single actionable unit of work produced by a breakdown"""
    title: str = Field(..., min_length=1, description="Concise, actionable task title")
    description: str = Field("", description="What needs to be done")
    priority: TaskPriority = Field(..., description="low, medium or high")
    status: Literal["todo"] = Field(INITIAL_TASK_STATUS, description="Always 'todo' for generated tasks")

    @validator('title', pre=True)
    def strip_title(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @validator('description', pre=True)
    def default_description(cls, v):
        # Models occasionally emit null descriptions
        return "" if v is None else v

    @validator('priority', pre=True)
    def normalize_priority(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @validator('status', pre=True)
    def force_initial_status(cls, v):
        return INITIAL_TASK_STATUS

    class Config:
        use_enum_values = True


class TokenUsage(BaseModel):
    """Token accounting reported by the provider"""
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class CompletionResult(BaseModel):
    """Raw assistant output of one chat completion"""
    text: str = ""
    model: str
    finish_reason: Optional[str] = None
    usage: Optional[TokenUsage] = None


class ParseStatus(str, Enum):
    """Whether tasks came from the model output or from the fallback list"""
    PARSED = "parsed"
    FALLBACK = "fallback"


class ParseResult(BaseModel):
    """Tagged outcome of parsing the assistant output"""
    status: ParseStatus
    tasks: List[Task]
    reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.status == ParseStatus.FALLBACK


class BreakdownResult(BaseModel):
    """Outcome of one successful breakdown request"""
    request_id: str
    tasks: List[Task]
    parse_status: ParseStatus
    duration_ms: int
    model: Optional[str] = None
    usage: Optional[TokenUsage] = None
