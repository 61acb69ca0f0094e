from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ValidationError

CONNECT_EVENT = "PB_CONNECT"
WILDCARD_TOPIC = "*"


class ConnectionState(str, Enum):
    """Lifecycle of the realtime connection"""
    disconnected = "disconnected"
    connecting = "connecting"
    connected = "connected"


class ConnectPayload(BaseModel):
    """Handshake frame payload carrying the server assigned client id"""
    client_id: str = Field(..., alias="clientId", min_length=1)

    model_config = {
        "populate_by_name": True,
        "extra": "allow"
    }


class RecordChange(BaseModel):
    """Collection change notification: which action happened to which record"""
    action: str = Field(..., description="create, update or delete")
    record: Dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "extra": "allow"
    }

    @property
    def record_id(self) -> Optional[str]:
        return self.record.get("id")


class RealtimeEvent(BaseModel):
    """A decoded server-push event handed to subscription handlers"""
    name: str = ""
    data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def change(self) -> Optional[RecordChange]:
        """Typed view of the payload when it is a record change, else None"""
        try:
            return RecordChange.model_validate(self.data)
        except ValidationError:
            return None

    @property
    def topic(self) -> str:
        """Collection part of 'collection/recordId' style event names"""
        return self.name.split("/", 1)[0]


class SubscriptionRequest(BaseModel):
    """Body of the subscription update POST"""
    client_id: str = Field(..., alias="clientId")
    subscriptions: List[str] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True
    }
