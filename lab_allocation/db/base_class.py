# /lab_allocation/db/base_class.py

from typing import Dict

from sqlalchemy.orm import declarative_base, declared_attr


class _Base:
    # Table names default to the pluralised, lower-cased class name
    # (Computer -> computers). Models may still set __tablename__ explicitly.
    @declared_attr
    def __tablename__(cls) -> str:
        return f"{cls.__name__.lower()}s"

    def to_dict(self) -> Dict:
        """Column values as a plain dictionary, safe to use after the session closes."""
        return {c.name: getattr(self, c.name) for c in self.__table__.columns}


Base = declarative_base(cls=_Base)
