from datetime import date, datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from sqlalchemy.orm import Session

from calendar_backend.config import API_PREFIX
from calendar_backend.database import get_db
from calendar_backend.services.date_utils import parse_day, parse_timestamp
from calendar_backend.services.errors import RuleViolation
from calendar_backend.services.event_service import EventService

router = APIRouter(prefix=f"{API_PREFIX}/events", tags=["Events"])

Category = Literal["exercise", "eating", "work", "relax", "family", "social"]


class _EventFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @field_validator("day", mode="before", check_fields=False)
    @classmethod
    def _coerce_day(cls, value):
        return None if value is None else parse_day(value)

    @field_validator("start_time", "end_time", mode="before", check_fields=False)
    @classmethod
    def _coerce_timestamp(cls, value):
        return None if value is None else parse_timestamp(value)


class EventCreate(_EventFields):
    title: str = Field(min_length=1)
    category: Category = "work"
    day: date = Field(alias="date")
    start_time: datetime = Field(alias="startTime")
    end_time: datetime = Field(alias="endTime")
    # Set when the event was dropped from a task; not persisted
    task_id: Optional[int] = Field(default=None, alias="taskId")

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class EventUpdate(_EventFields):
    title: Optional[str] = None
    category: Optional[Category] = None
    day: Optional[date] = Field(default=None, alias="date")
    start_time: Optional[datetime] = Field(default=None, alias="startTime")
    end_time: Optional[datetime] = Field(default=None, alias="endTime")


def _to_service_fields(payload: dict) -> dict:
    if "day" in payload:
        payload["date"] = payload.pop("day")
    return payload


def _day_bound(name: str, value: str) -> date:
    try:
        return parse_day(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {name}: {value}")


@router.get("")
async def list_events(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
):
    if (start_date is None) != (end_date is None):
        raise HTTPException(status_code=400, detail="Both startDate and endDate are required for a date range")
    start = _day_bound("startDate", start_date) if start_date else None
    end = _day_bound("endDate", end_date) if end_date else None

    events = EventService.list(db, start, end)
    return {"success": True, "count": len(events), "data": [e.to_dict() for e in events]}


@router.post("", status_code=201)
async def create_event(event_data: EventCreate, db: Session = Depends(get_db)):
    data = _to_service_fields(event_data.model_dump(exclude={"task_id"}))
    try:
        event = EventService.create(db, data)
    except RuleViolation as e:
        raise HTTPException(status_code=400, detail=e.messages)
    result = event.to_dict()
    if event_data.task_id is not None:
        result["taskId"] = event_data.task_id
    return {"success": True, "data": result}


@router.put("/{event_id}")
async def update_event(event_id: int, event_data: EventUpdate, db: Session = Depends(get_db)):
    data = _to_service_fields(event_data.model_dump(exclude_unset=True, exclude_none=True))
    try:
        event = EventService.update(db, event_id, data)
    except RuleViolation as e:
        raise HTTPException(status_code=400, detail=e.messages)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return {"success": True, "data": event.to_dict()}


@router.delete("/{event_id}")
async def delete_event(event_id: int, db: Session = Depends(get_db)):
    if not EventService.delete(db, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return {"success": True, "data": {}}
