# alliance_wars/db/base_class.py
from typing import Any
from sqlalchemy.orm import as_declarative, declared_attr

@as_declarative()
class Base:
    id: Any
    __name__: str

    # Table name is the lowercased class name plus "s" unless a model sets its own
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"
