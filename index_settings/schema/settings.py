"""
IndexSettings: the sparse top-level settings document and its builder.

Each top-level group is a plain optional value: present means "apply this value",
absent means "leave unchanged". Resetting a single group is a separate DELETE,
not a null in this document.

    settings = (
        IndexSettings()
        .with_stop_words(["a", "the", "of"])
        .with_pagination(PaginationSettings(max_total_hits=100))
    )
"""

from collections.abc import Iterable, Mapping
from typing import Annotated

from index_settings.schema.groups import FacetingSettings, PaginationSettings, TypoToleranceSettings
from index_settings.schema.setting import OmitIfNone, SparseModel


class IndexSettings(SparseModel):
    """Settings of one index. IndexSettings() encodes to {} and is a no-op when dispatched."""

    # Words treated as equivalent to each key
    synonyms: Annotated[dict[str, list[str]] | None, OmitIfNone()] = None
    stop_words: Annotated[list[str] | None, OmitIfNone()] = None
    # Ordered by importance
    ranking_rules: Annotated[list[str] | None, OmitIfNone()] = None
    filterable_attributes: Annotated[list[str] | None, OmitIfNone()] = None
    sortable_attributes: Annotated[list[str] | None, OmitIfNone()] = None
    distinct_attribute: Annotated[str | None, OmitIfNone()] = None
    # Ordered by importance
    searchable_attributes: Annotated[list[str] | None, OmitIfNone()] = None
    displayed_attributes: Annotated[list[str] | None, OmitIfNone()] = None
    pagination: Annotated[PaginationSettings | None, OmitIfNone()] = None
    faceting: Annotated[FacetingSettings | None, OmitIfNone()] = None
    typo_tolerance: Annotated[TypoToleranceSettings | None, OmitIfNone()] = None

    def with_synonyms(self, synonyms: Mapping[str, Iterable[str]]) -> "IndexSettings":
        return self.model_copy(
            update={"synonyms": {str(k): [str(v) for v in values] for k, values in synonyms.items()}}
        )

    def with_stop_words(self, stop_words: Iterable[str]) -> "IndexSettings":
        return self.model_copy(update={"stop_words": [str(w) for w in stop_words]})

    def with_ranking_rules(self, ranking_rules: Iterable[str]) -> "IndexSettings":
        return self.model_copy(update={"ranking_rules": [str(r) for r in ranking_rules]})

    def with_filterable_attributes(self, attributes: Iterable[str]) -> "IndexSettings":
        return self.model_copy(update={"filterable_attributes": [str(a) for a in attributes]})

    def with_sortable_attributes(self, attributes: Iterable[str]) -> "IndexSettings":
        return self.model_copy(update={"sortable_attributes": [str(a) for a in attributes]})

    def with_distinct_attribute(self, attribute: str) -> "IndexSettings":
        return self.model_copy(update={"distinct_attribute": str(attribute)})

    def with_searchable_attributes(self, attributes: Iterable[str]) -> "IndexSettings":
        return self.model_copy(update={"searchable_attributes": [str(a) for a in attributes]})

    def with_displayed_attributes(self, attributes: Iterable[str]) -> "IndexSettings":
        return self.model_copy(update={"displayed_attributes": [str(a) for a in attributes]})

    def with_pagination(self, pagination: PaginationSettings) -> "IndexSettings":
        return self.model_copy(update={"pagination": pagination})

    def with_faceting(self, faceting: FacetingSettings) -> "IndexSettings":
        return self.model_copy(update={"faceting": faceting})

    def with_typo_tolerance(self, typo_tolerance: TypoToleranceSettings) -> "IndexSettings":
        return self.model_copy(update={"typo_tolerance": typo_tolerance})
