"""Request/response schemas for the schedule API."""

from pydantic import BaseModel, Field


class ReadingDayRequest(BaseModel):
    """Body for authoring a reading day.

    Attributes:
        subject: Subject studied that day
        topics: Ordered topic labels
        time: Free-form schedule label
    """

    subject: str
    topics: list[str] = Field(default_factory=list)
    time: str = ""


class ExamDayRequest(BaseModel):
    title: str
    questions: list[str] = Field(default_factory=list)


class CompletionRequest(BaseModel):
    """Body for marking a day completed. Reading days ignore both fields."""

    grade: str = ""
    ipfs_link: str = ""


class ScheduleInfoResponse(BaseModel):
    owner: str
    candidate_name: str


class ScheduleErrorDetail(BaseModel):
    code: str
    message: str
    week_number: int | None = None
    day_number: int | None = None
