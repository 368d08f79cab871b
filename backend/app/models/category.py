from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.database import Base


class Category(Base):
    """Navigation category; roots have no parent, children point at a root"""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    order = Column("order", Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class SubCategory(Base):
    """Legacy flat subcategory list, read-only"""
    __tablename__ = "subcategories"

    id = Column(Integer, primary_key=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    order = Column("order", Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


# Pydantic models for API

class CategoryBase(BaseModel):
    """Base category schema"""
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    parent_id: Optional[int] = Field(default=None, description="Parent category ID, null for a root category")


class CategoryCreate(CategoryBase):
    """Schema for creating a category"""
    pass


class CategoryUpdate(CategoryBase):
    """Schema for updating a category (full replacement of name, slug and parent)"""
    pass


class CategoryResponse(CategoryBase):
    """Schema for category response"""
    id: int
    order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CategoryTreeNode(CategoryResponse):
    """Root category with its ordered children"""
    children: List[CategoryResponse] = Field(default_factory=list)


class CategoryOrder(BaseModel):
    id: int
    order: int


class CategoryReorderSingle(BaseModel):
    order: int


class CategoryBulkReorderRequest(BaseModel):
    items: List[CategoryOrder]


class SubCategoryResponse(BaseModel):
    id: int
    category_id: int
    name: str
    slug: str
    order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
