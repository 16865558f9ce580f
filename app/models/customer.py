"""
Customer table definition (read-only through the API)
"""

from sqlalchemy import Column, String, Numeric
from app.database import Base

class Customer(Base):
    """Customer record of the sample database"""
    __tablename__ = "customer"
    
    CUST_CODE = Column(String(6), primary_key=True)
    CUST_NAME = Column(String(40), nullable=False)
    CUST_CITY = Column(String(35), nullable=True)
    WORKING_AREA = Column(String(35), nullable=False)
    CUST_COUNTRY = Column(String(20), nullable=False)
    GRADE = Column(Numeric(10, 0), nullable=True)
    OPENING_AMT = Column(Numeric(12, 2), nullable=False)
    RECEIVE_AMT = Column(Numeric(12, 2), nullable=False)
    PAYMENT_AMT = Column(Numeric(12, 2), nullable=False)
    OUTSTANDING_AMT = Column(Numeric(12, 2), nullable=False)
    PHONE_NO = Column(String(17), nullable=False)
    AGENT_CODE = Column(String(6), nullable=True)
    
    def __repr__(self):
        return f"<Customer(CUST_CODE='{self.CUST_CODE}', CUST_NAME='{self.CUST_NAME}')>"
