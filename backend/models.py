from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, Numeric, ForeignKey, CheckConstraint, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from constants import CURRENCY_CODE_LENGTH, PRICE_SCALE, SKU_MAX_LENGTH, PRODUCT_NAME_MAX_LENGTH, NAME_MAX_LENGTH
from database import Base
import uuid

from utils.clock import utc_now


def generate_uuid():
    return str(uuid.uuid4())


class Category(Base):
    __tablename__ = 'categories'

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False, unique=True)
    description = Column(Text)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, default=utc_now)

    products = relationship("Product", back_populates="category")

    __table_args__ = (
        CheckConstraint("name != ''"),
        Index('idx_categories_active', 'active'),
    )


class Product(Base):
    """
    Stored product row.

    ``name_key`` is the case-folded name; the unique constraint on
    (category_id, name_key) backs the per-category name rule at the database
    level. ``version`` is bumped by SQLAlchemy on every UPDATE and guards
    against lost updates.
    """
    __tablename__ = 'products'

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(PRODUCT_NAME_MAX_LENGTH), nullable=False)
    name_key = Column(String(PRODUCT_NAME_MAX_LENGTH), nullable=False)
    description = Column(Text)
    sku = Column(String(SKU_MAX_LENGTH), nullable=True, unique=True)
    price_amount = Column(Numeric(14, PRICE_SCALE, asdecimal=True), nullable=False)
    price_currency = Column(String(CURRENCY_CODE_LENGTH), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    category_id = Column(String, ForeignKey('categories.id'), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, default=utc_now)
    version = Column(Integer, nullable=False)

    category = relationship("Category", back_populates="products", lazy="joined")

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("name != ''"),
        CheckConstraint("stock_quantity >= 0", name='ck_products_stock_non_negative'),
        CheckConstraint("price_amount >= 0", name='ck_products_price_non_negative'),
        UniqueConstraint('category_id', 'name_key', name='uq_products_category_name'),
        Index('idx_products_category', 'category_id'),
    )


class User(Base):
    __tablename__ = 'users'

    id = Column(String, primary_key=True, default=generate_uuid)
    first_name = Column(String(NAME_MAX_LENGTH), nullable=False)
    last_name = Column(String(NAME_MAX_LENGTH), nullable=False)
    email = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default='CUSTOMER')
    active = Column(Boolean, nullable=False, default=False)
    email_verified = Column(Boolean, nullable=False, default=False)
    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, default=utc_now)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("role IN ('CUSTOMER', 'ADMIN', 'MANAGER')", name='ck_users_role'),
        Index('idx_users_role', 'role'),
        Index('idx_users_active', 'active'),
    )
