import json
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, Protocol, TypeVar

from sqlalchemy.orm import sessionmaker

V = TypeVar("V")


# insert overwrites silently; get and remove return None for a missing key
class Repository(Protocol[V]):
    def insert(self, key: str, value: V) -> None:
        ...

    def get(self, key: str) -> Optional[V]:
        ...

    def remove(self, key: str) -> Optional[V]:
        ...

    def values(self) -> List[V]:
        ...

    def is_empty(self) -> bool:
        ...


class InMemoryRepository(Generic[V]):
    def __init__(self) -> None:
        self._items: Dict[str, V] = {}

    def insert(self, key: str, value: V) -> None:
        self._items[key] = value

    def get(self, key: str) -> Optional[V]:
        return self._items.get(key)

    def remove(self, key: str) -> Optional[V]:
        return self._items.pop(key, None)

    def values(self) -> List[V]:
        return [self._items[k] for k in sorted(self._items)]

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


class SqlRepository(Generic[V]):
    """One SQLAlchemy table of key -> JSON rows; one session per call."""

    def __init__(
        self,
        session_factory: sessionmaker,
        row_cls: Any,
        decode: Callable[[Dict[str, Any]], V],
        encode: Optional[Callable[[V], Dict[str, Any]]] = None,
    ):
        self.session_factory = session_factory
        self.row_cls = row_cls
        self.decode = decode
        self.encode = encode or (lambda value: value.to_dict())

    def _load(self, row) -> V:
        return self.decode(json.loads(row.payload))

    def insert(self, key: str, value: V) -> None:
        payload = json.dumps(self.encode(value), ensure_ascii=False)
        with self.session_factory() as session:
            session.merge(self.row_cls(key=key, payload=payload, updated_at=datetime.now()))
            session.commit()

    def get(self, key: str) -> Optional[V]:
        with self.session_factory() as session:
            row = session.get(self.row_cls, key)
            return self._load(row) if row is not None else None

    def remove(self, key: str) -> Optional[V]:
        with self.session_factory() as session:
            row = session.get(self.row_cls, key)
            if row is None:
                return None
            value = self._load(row)
            session.delete(row)
            session.commit()
            return value

    def values(self) -> List[V]:
        with self.session_factory() as session:
            rows = session.query(self.row_cls).order_by(self.row_cls.key).all()
            return [self._load(r) for r in rows]

    def is_empty(self) -> bool:
        with self.session_factory() as session:
            return session.query(self.row_cls.key).first() is None
