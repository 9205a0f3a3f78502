"""Pydantic models for catalog snapshots and museum progress responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

# --- Catalog snapshots ---


class WikiSnapshot(BaseModel):
    source: str
    generated_at: str
    category_count: int = Field(ge=0)
    total_items: int = Field(ge=0)
    categories: dict[str, list[str]] = Field(default_factory=dict)
    aliases: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_aliases(self) -> WikiSnapshot:
        for alias, base in self.aliases.items():
            if alias == base:
                raise ValueError(f"Alias '{alias}' maps to itself")
        return self

    @model_validator(mode="after")
    def _validate_counts(self) -> WikiSnapshot:
        if self.category_count != len(self.categories):
            raise ValueError(
                f"category_count ({self.category_count}) does not match "
                f"number of categories ({len(self.categories)})"
            )
        total = sum(len(items) for items in self.categories.values())
        if self.total_items != total:
            raise ValueError(
                f"total_items ({self.total_items}) does not match item count ({total})"
            )
        return self


# --- Requests ---


class MuseumRequest(BaseModel):
    uuid: str | None = None
    api_key: str | None = Field(default=None, alias="apiKey")

    model_config = {"populate_by_name": True}


# --- Responses ---


class MissingItem(BaseModel):
    category: str
    name: str


class Counts(BaseModel):
    donated: int = Field(ge=0)
    total: int | None = Field(default=None, ge=1)
    completion_pct: int | None = Field(default=None, alias="completionPct", ge=0)

    model_config = {"populate_by_name": True}


class MuseumProgress(BaseModel):
    success: bool = True
    profile_id: str | None = Field(default=None, alias="profileId")
    categories: list[str] = Field(default_factory=list)
    counts: Counts
    missing: list[MissingItem] = Field(default_factory=list)
    hints: list[str] = Field(default_factory=list)
    raw: dict[str, Any] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    error: str
    details: Any = None


class HealthResponse(BaseModel):
    status: str = "ok"
    catalog_source: str = Field(alias="catalogSource")
    catalog_categories: int = Field(alias="catalogCategories", ge=0)
    catalog_items: int = Field(alias="catalogItems", ge=0)

    model_config = {"populate_by_name": True}
