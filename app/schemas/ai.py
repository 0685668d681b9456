"""AI content assistant request and response schemas."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ContentRequest(BaseModel):
    """Body of the excerpt and content-analysis endpoints."""

    content: str | None = None

    @model_validator(mode="after")
    def require_content(self) -> "ContentRequest":
        if not self.content:
            mssg = "Content is required"
            raise ValueError(mssg)
        return self


class TagsRequest(BaseModel):
    """Body of ``POST /api/ai/generate-tags``."""

    title: str | None = None
    content: str | None = None

    @model_validator(mode="after")
    def require_text(self) -> "TagsRequest":
        if not self.title and not self.content:
            mssg = "Title or content is required"
            raise ValueError(mssg)
        return self


class ExcerptData(BaseModel):
    excerpt: str


class TagsData(BaseModel):
    tags: list[str]


class ContentMetrics(BaseModel):
    """Counts computed locally from the submitted text."""

    model_config = ConfigDict(populate_by_name=True)

    word_count: int = Field(serialization_alias="wordCount")
    reading_time: int = Field(serialization_alias="readingTime")
    sentences: int
    avg_words_per_sentence: int = Field(serialization_alias="avgWordsPerSentence")


class AnalysisData(BaseModel):
    analysis: str
    metrics: ContentMetrics
