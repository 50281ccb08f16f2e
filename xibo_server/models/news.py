from typing import Literal

from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field, model_validator

NewsTopic = Literal[
    "WORLD",
    "NATION",
    "BUSINESS",
    "TECHNOLOGY",
    "ENTERTAINMENT",
    "SPORTS",
    "SCIENCE",
    "HEALTH",
]
NewsLanguage = Literal["ja", "en-US", "en-GB", "zh-CN", "de", "es-419", "ar"]


class NewsItem(OutputBaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    link: str | None = None
    pubDate: str | None = None
    description: str | None = None
    source: str | None = None


class NewsFeed(OutputBaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    link: str | None = None
    items: list[NewsItem]


class GetXiboNewsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    limit: int = Field(5, ge=1, le=50, description="Maximum articles to return.")


class GetGoogleNewsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    searchType: Literal["topic", "geo", "query"] = Field(
        "topic", description="'topic' for a section, 'geo' for a location, 'query' for a search."
    )
    topic: NewsTopic | None = Field(
        None, description="Section, required when searchType='topic'."
    )
    location: str | None = Field(
        None, description="Place name, required when searchType='geo', e.g. 'Tokyo'."
    )
    query: str | None = Field(None, description="Search terms, required when searchType='query'.")
    language: NewsLanguage = Field("en-US", description="Edition language.")
    limit: int = Field(10, ge=1, le=50, description="Maximum articles to return.")

    @model_validator(mode="after")
    def _require_search_value(self):
        required = {"topic": "topic", "geo": "location", "query": "query"}[self.searchType]
        if not getattr(self, required):
            raise ValueError(f"'{required}' is required when searchType is '{self.searchType}'")
        return self
