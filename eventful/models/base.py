"""
Declarative base shared by all Eventful models.
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
