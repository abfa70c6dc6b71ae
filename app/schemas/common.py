from pydantic import BaseModel
from typing import Any, ClassVar, Dict, Tuple


# Ids are int4 columns on PostgreSQL
MAX_ID = 2**31 - 1


class MessageResponse(BaseModel):
    message: str


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class PartialUpdate(BaseModel):
    """
    Update body whose fields fall in two groups.

    REPLACE_FIELDS are always written, an absent field clears the column.
    KEEP_IF_ABSENT_FIELDS are written only when the client sent them; a null
    sent for a column listed in NOT_NULL_FIELDS is ignored.
    """

    REPLACE_FIELDS: ClassVar[Tuple[str, ...]] = ()
    KEEP_IF_ABSENT_FIELDS: ClassVar[Tuple[str, ...]] = ()
    NOT_NULL_FIELDS: ClassVar[Tuple[str, ...]] = ()

    def changes(self) -> Dict[str, Any]:
        values = self.model_dump(include=set(self.REPLACE_FIELDS))
        present = self.model_dump(include=set(self.KEEP_IF_ABSENT_FIELDS), exclude_unset=True)
        for key, value in present.items():
            if value is None and key in self.NOT_NULL_FIELDS:
                continue
            values[key] = value
        return values
