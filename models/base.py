"""
Shared base for board entities (players, teams, picks, trades)
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class DraftBoardBaseModel(BaseModel):
    """Assignments are validated and enums are stored as their plain values."""

    model_config = ConfigDict(validate_assignment=True, use_enum_values=True)

    id: Optional[int] = None

    def __repr__(self):
        shown = ', '.join(f'{name}={value!r}' for name, value in self.model_dump(exclude_none=True).items())
        return f"{type(self).__name__}({shown})"

    def to_dict(self, exclude_none: bool = True) -> Dict[str, Any]:
        return self.model_dump(exclude_none=exclude_none)

    @classmethod
    def from_api_data(cls, data: Dict[str, Any]):
        """
        Build an instance from a JSON object returned by an API.

        Raises:
            ValueError: If data is empty (pydantic's ValidationError for bad fields)
        """
        if not data:
            raise ValueError(f"Cannot create {cls.__name__} from empty data")
        return cls.model_validate(data)
