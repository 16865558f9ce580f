"""
Student table definition (read-only through the API)
"""

from sqlalchemy import Column, Integer, String, Date
from app.database import Base

class Student(Base):
    __tablename__ = "student"
    
    STUDENT_ID = Column(Integer, primary_key=True)
    NAME = Column(String(100), nullable=False)
    EMAIL = Column(String(100), nullable=True)
    COURSE = Column(String(50), nullable=True)
    ENROLLED_ON = Column(Date, nullable=True)
    
    def __repr__(self):
        return f"<Student(STUDENT_ID={self.STUDENT_ID}, NAME='{self.NAME}')>"
