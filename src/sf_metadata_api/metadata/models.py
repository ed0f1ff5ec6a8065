from pydantic import BaseModel, Field


class FieldDefinition(BaseModel):
    name: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)

    def as_payload(self) -> dict[str, str]:
        return {"name": self.name, "label": self.label, "type": self.type}


class ObjectDefinition(BaseModel):
    name: str = Field(..., min_length=1)
    fields: list[FieldDefinition] = Field(..., min_length=1)
    org_alias: str = Field(..., min_length=1)

    @property
    def api_name(self) -> str:
        return f"{self.name}__c"
