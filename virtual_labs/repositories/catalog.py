from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from pydantic import TypeAdapter
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from ..domain.models import VirtualLab
from ..infrastructure.database.tables import LabDBModel
from ..infrastructure.database.connection import engine as default_engine
from ..data.hardcoded_labs import HARDCODED_LABS

_lab_adapter = TypeAdapter(VirtualLab)


# The Interface
class LabCatalog(ABC):
    """
    Defines how the application looks up lab definitions.
    Scenes resolve a lab here before mounting a session on it.
    """

    @abstractmethod
    def get_lab(self, lab_id: str) -> Optional[VirtualLab]:
        """Retrieves a lab by ID, or None if it does not exist."""
        pass

    @abstractmethod
    def list_labs(self) -> List[VirtualLab]:
        """Returns every lab in catalog order."""
        pass


class StaticLabCatalog(LabCatalog):
    """
    Get labs from a hardcoded list in memory.
    """

    def __init__(self, labs: Optional[Dict[str, VirtualLab]] = None):
        # Index for O(1) lookup
        self._index: Dict[str, VirtualLab] = HARDCODED_LABS if labs is None else labs

    def get_lab(self, lab_id: str) -> Optional[VirtualLab]:
        return self._index.get(lab_id)

    def list_labs(self) -> List[VirtualLab]:
        return list(self._index.values())


class SQLLabCatalog(LabCatalog):
    """
    Reads from the 'labs' table (JSONB on PostgreSQL).
    """

    def __init__(self, engine: Engine = default_engine):
        self.engine = engine

    def get_lab(self, lab_id: str) -> Optional[VirtualLab]:
        with Session(self.engine) as db:
            statement = select(LabDBModel).where(LabDBModel.lab_id == lab_id)
            result = db.exec(statement).first()

            if not result:
                return None

            # Deserialize JSON -> dataclasses (nested config and steps included)
            return _lab_adapter.validate_python(result.lab_data)

    def list_labs(self) -> List[VirtualLab]:
        with Session(self.engine) as db:
            rows = db.exec(select(LabDBModel).order_by(LabDBModel.created_at)).all()
            return [_lab_adapter.validate_python(row.lab_data) for row in rows]
