from pydantic import BaseModel


class FieldPayload(BaseModel):
    name: str
    label: str
    type: str


class CreateMetadataResponse(BaseModel):
    message: str
    objectName: str
    fields: list[FieldPayload]
    output: str
    warnings: str | None = None


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: str | None = None


class HealthResponse(BaseModel):
    status: str
    message: str
