from sqlalchemy import Column, String, Integer
from crm.models.base import BaseModel


class Audit(BaseModel):
    __tablename__ = "audits"

    action = Column(String(64), nullable=False, index=True)
    resource_id = Column(Integer, nullable=True)
    payload_hash = Column(String(128), nullable=False)
