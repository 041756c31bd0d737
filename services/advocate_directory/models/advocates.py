# services/advocate_directory/models/advocates.py
from sqlalchemy import Column, Integer, BigInteger, String, DateTime, JSON, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from shared.db import Base


class Advocate(Base):
    __tablename__ = "advocates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    city = Column(String, nullable=False)
    degree = Column(String, nullable=False)
    # serialized list of specialty names, searched as text
    specialties = Column("payload", JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    years_of_experience = Column(Integer, nullable=False)
    phone_number = Column(BigInteger, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('idx_advocate_last_name', 'last_name'),
        Index('idx_advocate_city', 'city'),
    )

    def __repr__(self):
        return f"<Advocate(id={self.id}, name={self.first_name} {self.last_name})>"
