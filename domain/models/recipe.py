"""
Recipe model. Ingredients, instructions and nutrition are stored as JSON documents.
"""

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class Recipe(Base):
    """A named dish with ingredients, ordered steps, nutrition and timing"""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    ingredients = Column(JSON, nullable=False, default=list)  # [{name, amount, unit}]
    instructions = Column(JSON, nullable=False, default=list)  # [{stepNumber, content, richText}]
    nutrition_info = Column(JSON, nullable=False, default=dict)
    image_url = Column(Text)
    prep_time = Column(Integer, nullable=False, default=0)
    cook_time = Column(Integer, nullable=False, default=0)
    total_time = Column(Integer, nullable=False, default=0)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="recipes")
