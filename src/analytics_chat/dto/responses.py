"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer

from analytics_chat.entities import AnalyticsAnswer, VisualizationType


class QueryResponse(BaseModel):
    """Response DTO for POST /analytics-query."""

    model_config = ConfigDict(populate_by_name=True)

    sql: str = Field(..., description="Executed SQL, empty for conversational replies")
    explanation: str = Field(..., description="What the query does")
    data: list[dict[str, Any]] = Field(default_factory=list, description="Result rows")
    columns: list[str] = Field(default_factory=list, description="Column names in order")
    visualization_type: VisualizationType = Field("table", alias="visualizationType")
    cached: bool = Field(..., description="Whether the answer came from the cache")
    execution_time: int | None = Field(
        None,
        alias="executionTime",
        description="Milliseconds spent generating and executing",
    )
    is_conversational: bool | None = Field(None, alias="isConversational")

    @model_serializer(mode="wrap")
    def _omit_absent_optionals(self, handler):
        # Row values keep their nulls; only these two keys are dropped when unset
        payload = handler(self)
        for key in ("executionTime", "execution_time", "isConversational", "is_conversational"):
            if key in payload and payload[key] is None:
                del payload[key]
        return payload

    @classmethod
    def from_entity(cls, answer: AnalyticsAnswer) -> "QueryResponse":
        return cls.model_validate(answer.to_payload())


class ChatText(BaseModel):
    """Generated chat text."""

    text: str
    usage: dict[str, int] | None = None


class ChatResponse(BaseModel):
    """Response DTO for POST /chat."""

    response: ChatText
    cached: bool


class ClearKeyResponse(BaseModel):
    """Response DTO for POST /cache/clear."""

    success: bool
    message: str
    key: str


class ClearAllResponse(BaseModel):
    """Response DTO for DELETE /cache/clear."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    deleted_count: int = Field(..., alias="deletedCount", ge=0)
    hint: str | None = None


class ErrorResponse(BaseModel):
    """Error body shared by every endpoint."""

    error: str
    message: str | None = None
    sql: str | None = None
    explanation: str | None = None
    hint: str | None = None


class ModelInfo(BaseModel):
    """One text-generation model."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    full_name: str = Field(..., alias="fullName")
    display_name: str = Field(..., alias="displayName")
    description: str = ""
    supported_methods: list[str] = Field(default_factory=list, alias="supportedMethods")


class ModelsResponse(BaseModel):
    """Response DTO for GET /models."""

    models: list[ModelInfo]
    count: int


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
    database_healthy: bool | None = Field(
        None,
        description="Whether the database is reachable",
    )
