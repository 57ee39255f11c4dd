from sqlalchemy import Column, Integer, String, JSON
from infrastructure.persistence.database import Base


class SbomModel(Base):
    """ORM model for SBOM storage"""
    __tablename__ = 'sboms'
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    version = Column(String, nullable=False)
    format = Column(String, nullable=False)
    components = Column(JSON, nullable=False)
    # `metadata` is reserved on declarative classes
    sbom_metadata = Column('metadata', JSON, nullable=False)
