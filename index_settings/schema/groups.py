"""Composite settings groups: pagination, faceting and typo tolerance."""

from collections.abc import Iterable
from typing import Annotated

from pydantic import Field

from index_settings.schema.setting import OmitIfNone, OmitIfNotSet, Setting, SparseModel


class PaginationSettings(SparseModel):
    """Pagination group. Service default: max_total_hits = 1000."""

    max_total_hits: int = Field(..., ge=0, description="Upper bound on hits reachable by paging")


class FacetingSettings(SparseModel):
    """Faceting group. Service default: max_values_per_facet = 100."""

    max_values_per_facet: int = Field(..., ge=0, description="Values returned per facet")


class MinWordSizeForTypos(SparseModel):
    """Minimum word length before one or two typos are tolerated. one_typo <= two_typos is checked by the service."""

    one_typo: Annotated[int | None, OmitIfNone()] = Field(default=5, ge=0, le=255)
    two_typos: Annotated[int | None, OmitIfNone()] = Field(default=9, ge=0, le=255)


class TypoToleranceSettings(SparseModel):
    """
    Typo tolerance group. `enabled` is tri-state: Reset asks the service to restore its default,
    which differs from both True and False. Lists and min word sizes are always sent.
    """

    enabled: Annotated[Setting[bool], OmitIfNotSet()] = Setting.not_set()
    disable_on_attributes: list[str] = Field(default_factory=list)
    disable_on_words: list[str] = Field(default_factory=list)
    min_word_size_for_typos: MinWordSizeForTypos = Field(default_factory=MinWordSizeForTypos)

    @classmethod
    def service_defaults(cls) -> "TypoToleranceSettings":
        """Value the service reports after a reset."""
        return cls(enabled=Setting.set(True))

    def with_enabled(self, enabled: bool | Setting[bool]) -> "TypoToleranceSettings":
        if not isinstance(enabled, Setting):
            enabled = Setting.set(enabled)
        return self.model_copy(update={"enabled": enabled})

    def with_disable_on_attributes(self, attributes: Iterable[str]) -> "TypoToleranceSettings":
        return self.model_copy(update={"disable_on_attributes": [str(a) for a in attributes]})

    def with_disable_on_words(self, words: Iterable[str]) -> "TypoToleranceSettings":
        return self.model_copy(update={"disable_on_words": [str(w) for w in words]})

    def with_min_word_size_for_typos(self, sizes: MinWordSizeForTypos) -> "TypoToleranceSettings":
        return self.model_copy(update={"min_word_size_for_typos": sizes})
