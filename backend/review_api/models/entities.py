from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Customer(Base):
    __tablename__ = "customer"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(32))


class Review(Base):
    __tablename__ = "review"

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    # POSITIVE | NEUTRAL | NEGATIVE
    type = Column(String(16), nullable=False)
    customer_id = Column(
        Integer,
        ForeignKey("customer.id", ondelete="RESTRICT"),
        nullable=False,
    )

    customer = relationship("Customer", lazy="joined")

    __table_args__ = (
        CheckConstraint("type IN ('POSITIVE', 'NEUTRAL', 'NEGATIVE')", name="ck_review_type"),
        Index("idx_review_type", "type"),
        Index("idx_review_customer_id", "customer_id"),
    )
