from pydantic import BaseModel, Field
from uuid import UUID, uuid4


class BaseEntity(BaseModel):
    """Base entity class with an opaque identifier"""
    id: UUID = Field(default_factory=uuid4)

    model_config = {
        "validate_assignment": True,
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000"
            }
        }
    }
