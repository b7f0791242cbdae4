from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String

from shortlink_app.constants import MAX_SHORT_CODE_LENGTH, MAX_URL_LENGTH
from shortlink_app.database.connection import Base


class URL(Base):
    """
    A shortened URL and its access counter.

    The unique index on short_code is what actually guarantees uniqueness;
    the existence check done during generation only narrows the race.
    Timestamps are written by UrlStore so that every mutation, including a
    redirect, refreshes updated_at.
    """
    __tablename__ = "urls"
    __table_args__ = (
        CheckConstraint("access_count >= 0", name="ck_urls_access_count_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    url = Column(String(MAX_URL_LENGTH), nullable=False)
    short_code = Column(String(MAX_SHORT_CODE_LENGTH), unique=True, nullable=False, index=True)
    access_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<URL {self.short_code} -> {self.url}>"
