from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from typing import Optional


class UserProductCollect(SQLModel, table=True):
    """A user's favorite ("collect") marker on a product. Managed outside this service."""

    __tablename__ = "user_product_collect"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_user_product_collect"),
    )

    id: Optional[int] = Field(default=None, primary_key=True, nullable=False)
    user_id: str = Field(index=True, nullable=False)
    product_id: int = Field(index=True, nullable=False)
