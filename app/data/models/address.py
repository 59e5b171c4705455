from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from app.data.database import Base


class AddressModel(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    line_one = Column(String, nullable=False)
    line_two = Column(String, nullable=True)
    city = Column(String, nullable=False)
    country = Column(String, nullable=False)
    zip_code = Column(String, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    user = relationship("UserModel", back_populates="addresses", foreign_keys=[user_id])

    @property
    def formatted_address(self) -> str:
        parts = [self.line_one, self.city, f"{self.country}-{self.zip_code}"]
        if self.line_two:
            parts.insert(1, self.line_two)
        return ", ".join(parts)
