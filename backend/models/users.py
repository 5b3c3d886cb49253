# backend/models/users.py
import enum
from sqlalchemy import Column, Integer, String, Enum
from database import Base

# Staff permission levels
class UserLevel(str, enum.Enum):
    ADMIN = "admin"
    CASHIER = "cashier"
    WAREHOUSE = "warehouse"

# Represents a staff account of the store back office
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    level = Column(Enum(UserLevel, values_callable=lambda e: [m.value for m in e]), nullable=False)
