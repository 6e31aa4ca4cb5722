"""
SQLAlchemy Models

Table definitions created at startup by ``create_tables``.
"""

from sqlalchemy import Column, Integer, String

from .engine import Base


class User(Base):
    """
    Application user.

    ``password`` holds a bcrypt digest; ``cpf`` is stored digits-only.
    """
    __tablename__ = "user"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    cpf = Column(String(11), unique=True, nullable=False, index=True)

    # Address
    state = Column(String(100), nullable=False)
    city = Column(String(100), nullable=False)
    neighborhood = Column(String(100), nullable=False)
    street = Column(String(200), nullable=False)
    number = Column(String(20), nullable=False)

    phone = Column(String(30), nullable=False)
    birthdate = Column(String(10), nullable=False)

    def __repr__(self):
        return f"<User {self.id} {self.email}>"
