from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.database import Base


class Slider(Base):
    """Homepage carousel slide"""
    __tablename__ = "sliders"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    subtitle = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=False)
    order = Column("order", Integer, nullable=True, index=True)  # Unset until the first bulk reorder
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


# Pydantic models for API

class SliderBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    subtitle: Optional[str] = None
    image_url: str = Field(..., min_length=1, max_length=1024)


class SliderCreate(SliderBase):
    pass


class SliderUpdate(SliderBase):
    pass


class SliderResponse(SliderBase):
    id: int
    order: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SliderOrder(BaseModel):
    id: int
    order: int


class SliderBulkReorderRequest(BaseModel):
    items: List[SliderOrder]
