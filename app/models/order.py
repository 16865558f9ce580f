"""
Order table definition
"""

from sqlalchemy import Column, Integer, String, Date, Numeric
from app.database import Base

class Order(Base):
    """Row of the orders table; ORD_NUM is allocated by the API, not the database"""
    __tablename__ = "orders"
    
    ORD_NUM = Column(Integer, primary_key=True, autoincrement=False)
    ORD_AMOUNT = Column(Numeric(12, 2), nullable=False)
    ADVANCE_AMOUNT = Column(Numeric(12, 2), nullable=False)
    ORD_DATE = Column(Date, nullable=False)
    CUST_CODE = Column(String(6), nullable=False)
    AGENT_CODE = Column(String(6), nullable=False)
    ORD_DESCRIPTION = Column(String(60), nullable=False)
    
    def __repr__(self):
        return f"<Order(ORD_NUM={self.ORD_NUM}, CUST_CODE='{self.CUST_CODE}', AGENT_CODE='{self.AGENT_CODE}')>"

# Columns a client may write; ORD_NUM is only ever the key
ORDER_COLUMNS = tuple(
    column.name for column in Order.__table__.columns if column.name != "ORD_NUM"
)
