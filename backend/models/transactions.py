from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, Text, false, func

from db.base import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    description = Column(Text)
    category = Column(Text, nullable=False, index=True)
    image = Column(Text)
    sold = Column(Boolean, nullable=False, default=False, server_default=false())
    date_of_sale = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
