"""
Request and result models for the Venue Availability Engine.

This module defines the 'Output' of the engine: the open slots for one
(venue, date) request, and the reason when the list is structurally empty.
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict
from datetime import date as date_type, time as time_type


class EmptyReason(str, Enum):
    """Why a result is deliberately empty (as opposed to filtered down to empty)."""
    NO_CAPACITY = "NoCapacity"
    VENUE_NOT_DEPLOYED = "VenueNotDeployed"


class AvailabilityRequest(BaseModel):
    """Inbound request: which slots are open for these treatments on this date?"""
    venue_id: str = Field(alias="venueId", min_length=1)
    date: date_type = Field(description="ISO calendar date")
    treatment_ids: List[str] = Field(alias="treatmentIds", default_factory=list)

    model_config = ConfigDict(populate_by_name=True, json_schema_extra={
        "example": {
            "venueId": "hotel_lutetia",
            "date": "2025-01-15",
            "treatmentIds": ["tr_massage_60", "tr_facial_30"]
        }
    })


class AvailableSlots(BaseModel):
    """
    The open slots for one venue and date.
    """
    date: date_type
    slots: List[time_type] = Field(default_factory=list, description="Open slots, ascending")
    reason: Optional[EmptyReason] = Field(
        default=None,
        description="Set only when the list is empty for a structural reason"
    )

    # Diagnostics: rejected slot count per constraint type (not sent on the wire)
    rejections: Dict[str, int] = Field(default_factory=dict)

    @property
    def slot_strings(self) -> List[str]:
        return [s.strftime("%H:%M") for s in self.slots]

    def to_response(self) -> dict:
        """Wire shape: {"availableSlots": [...], "reason"?: ...}."""
        response = {"availableSlots": self.slot_strings}
        if self.reason is not None:
            response["reason"] = self.reason.value
        return response
