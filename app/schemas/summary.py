from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SummaryReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_entries: int = 0
    by_teacher: dict[str, int] = Field(default_factory=dict)
    by_grade: dict[str, int] = Field(default_factory=dict)
    average_comment_length: int = 0
