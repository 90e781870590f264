# models.py

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String, Text
from database import Base


# Laporan masalah dari pengguna (untuk ditinjau manual)
class IssueReport(Base):
    __tablename__ = "issue_reports"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)  # nomor laporan
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    user_comment = Column(Text, nullable=False)
    deceased_sex = Column(String(10), nullable=False)
    estate_value = Column(Float, nullable=True)
    request_json = Column(Text, nullable=False)  # request mentah
