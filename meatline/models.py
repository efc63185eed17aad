from sqlalchemy import (
    Column, Integer, BigInteger, String, Text, Numeric, Boolean, ForeignKey, DateTime, Enum, JSON
)
from sqlalchemy.orm import relationship, declarative_base
from datetime import datetime
from decimal import Decimal
import enum

Base = declarative_base()


class RoleEnum(enum.Enum):
    DISTRIBUTOR = "DISTRIBUTOR"
    PRODUCER = "PRODUCER"
    ADMIN = "ADMIN"


class ProductUnitEnum(enum.Enum):
    KG = "KG"
    PIECE = "PIECE"


class OrderStatusEnum(enum.Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    CONFIRMED = "CONFIRMED"
    IN_PRODUCTION = "IN_PRODUCTION"
    READY = "READY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class NotificationTypeEnum(enum.Enum):
    ORDER_STATUS = "ORDER_STATUS"
    ORDER_CHANGE = "ORDER_CHANGE"
    PRODUCTION_UPDATE = "PRODUCTION_UPDATE"
    SYSTEM = "SYSTEM"


class BatchStatusEnum(enum.Enum):
    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    telegram_id = Column(BigInteger, unique=True, nullable=False)
    role = Column(Enum(RoleEnum), nullable=False, default=RoleEnum.DISTRIBUTOR)
    name = Column(String(255), nullable=False)
    phone = Column(String(20))
    company_name = Column(String(255))
    lang = Column(String(5), default="uz")
    is_active = Column(Boolean, nullable=False, default=False)  # Активирует ADMIN/PRODUCER
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    orders = relationship("Order", back_populates="distributor")


class Product(Base):
    __tablename__ = "products"
    id = Column(Integer, primary_key=True)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    unit = Column(Enum(ProductUnitEnum), nullable=False, default=ProductUnitEnum.KG)
    base_recipe = Column(JSON)             # {"ingredients": [...], "yield": 100}
    production_parameters = Column(JSON)   # {"cookingTime": 120, "temperature": 75, ...}
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Order(Base):
    __tablename__ = "orders"
    id = Column(Integer, primary_key=True)
    order_number = Column(String(32), unique=True, nullable=False)
    distributor_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    order_date = Column(DateTime, nullable=False, index=True)
    delivery_date = Column(DateTime, nullable=False)
    status = Column(Enum(OrderStatusEnum), nullable=False, default=OrderStatusEnum.DRAFT)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    distributor = relationship("User", back_populates="orders")
    items = relationship(
        "OrderItem", back_populates="order",
        cascade="all, delete-orphan", order_by="OrderItem.id"
    )
    status_history = relationship(
        "OrderStatusHistory", back_populates="order",
        cascade="all, delete-orphan", order_by="OrderStatusHistory.id"
    )


class OrderItem(Base):
    __tablename__ = "order_items"
    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Numeric(10, 2), nullable=False)           # Запрошено дистрибьютором
    original_quantity = Column(Numeric(10, 2), nullable=False)
    adjusted_quantity = Column(Numeric(10, 2))                  # Корректировка производителя
    adjustment_reason = Column(Text)
    unit_price = Column(Numeric(10, 2), nullable=False, default=0)
    total_price = Column(Numeric(12, 2), nullable=False, default=0)

    order = relationship("Order", back_populates="items")
    product = relationship("Product")

    @property
    def effective_quantity(self) -> Decimal:
        """Количество с учетом корректировки"""
        if self.adjusted_quantity is not None:
            return self.adjusted_quantity
        return self.quantity


class OrderStatusHistory(Base):
    __tablename__ = "order_status_history"
    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    status = Column(Enum(OrderStatusEnum), nullable=False)
    changed_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    order = relationship("Order", back_populates="status_history")
    user = relationship("User")


class Notification(Base):
    __tablename__ = "notifications"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(Enum(NotificationTypeEnum), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    related_entity_type = Column(String(50))
    related_entity_id = Column(Integer)  # Слабая ссылка, без FK
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User")


class ProductionBatch(Base):
    __tablename__ = "production_batches"
    id = Column(Integer, primary_key=True)
    batch_number = Column(String(32), unique=True, nullable=False)
    production_date = Column(DateTime, nullable=False)
    total_capacity = Column(Numeric(10, 2), nullable=False)
    used_capacity = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(Enum(BatchStatusEnum), nullable=False, default=BatchStatusEnum.PLANNED)
    notes = Column(Text)
    created_by = Column(Integer, ForeignKey("users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = relationship(
        "ProductionBatchItem", back_populates="batch",
        cascade="all, delete-orphan", order_by="ProductionBatchItem.id"
    )


class ProductionBatchItem(Base):
    __tablename__ = "production_batch_items"
    id = Column(Integer, primary_key=True)
    batch_id = Column(Integer, ForeignKey("production_batches.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    planned_quantity = Column(Numeric(10, 2), nullable=False)
    actual_quantity = Column(Numeric(10, 2))

    batch = relationship("ProductionBatch", back_populates="items")
    product = relationship("Product")
