from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric

from app.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    # tagi trzymane jako "a,b,c"
    tags_raw = Column("tags", String, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    @property
    def tags(self) -> list[str]:
        if not self.tags_raw:
            return []
        return [t for t in self.tags_raw.split(",") if t]

    @tags.setter
    def tags(self, values: list[str] | None):
        self.tags_raw = ",".join(t.strip() for t in (values or []) if t.strip())
