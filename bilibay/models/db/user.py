"""
User account model
"""

import uuid

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, Index, String, Uuid

from .base import Base, TimestampMixin


class UserDB(Base, TimestampMixin):
    """
    Marketplace account (buyer, seller or admin).

    Attributes:
        email: Unique, stored lowercase
        password_hash: bcrypt hash
        role: buyer | seller | admin
        default_shipping_address: {street, city, province, zip_code, country}
        is_active: Disabled accounts cannot log in
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    first_name = Column(String(100), nullable=False)
    middle_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=False)
    birthday = Column(Date, nullable=True)
    phone = Column(String(30), nullable=True)

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="buyer")

    email_verified = Column(Boolean, default=False, nullable=False)
    verification_token = Column(String(128), nullable=True, index=True)
    reset_password_token = Column(String(128), nullable=True, index=True)
    reset_password_expires = Column(DateTime(timezone=True), nullable=True)

    default_shipping_address = Column(JSON, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (Index("idx_users_role", "role"),)

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p for p in parts if p)

    def __repr__(self):
        return f"<UserDB(id='{self.id}', email='{self.email}', role='{self.role}')>"
