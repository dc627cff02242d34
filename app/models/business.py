# /app/models/business.py

from sqlalchemy import Column, String, Text, JSON
from app.models import Base, generate_uuid

class Business(Base):
    """One stored business row. created_at backs the secondary lookup index."""
    __tablename__ = "businesses"
    id = Column(String(255), primary_key=True, default=generate_uuid)
    created_at = Column(String(32), nullable=False, index=True)
    business_name = Column(String(255), default="")
    address = Column(String(255), default="")
    street = Column(String(255), default="")
    city = Column(String(255), default="")
    zip = Column(String(20), default="")
    phone = Column(String(50), default="")
    website = Column(String(255), default="")
    google = Column(String(255), default="")
    facebook_url = Column(String(255), default="")
    facebook_last_post = Column(String(255), default="")
    instagram_url = Column(String(255), default="")
    instagram_present = Column(String(50), default="")
    category = Column(String(255), default="")
    online_on = Column(String(255), default="")
    notes = Column(Text, default="")
    contact_stage = Column(String(50), default="New Lead")
    note_history_entries = Column(JSON, default=list)
