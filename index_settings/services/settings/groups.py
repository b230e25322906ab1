"""Settings group registry: aggregate key, endpoint suffix, write method and value type per group."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from index_settings.errors import UnknownSettingsGroup
from index_settings.schema.groups import FacetingSettings, PaginationSettings, TypoToleranceSettings
from index_settings.schema.settings import IndexSettings


class SettingsGroup(BaseModel):
    """One independently addressable settings unit of an index."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Group name as used in the endpoint path")
    key: str | None = Field(..., description="Key inside the aggregate document; None for the aggregate")
    path: str = Field(..., description="Suffix appended to /indexes/{index_uid}")
    write_method: Literal["PUT", "PATCH"] = Field(..., description="Method used to write the group")
    value_type: Any = Field(..., description="Typed value read from and written to the group")

    @property
    def patchable(self) -> bool:
        """Composite groups and the aggregate accept partial (sparse) writes."""
        return self.write_method == "PATCH"


def _group(name: str, key: str, write_method: Literal["PUT", "PATCH"], value_type: Any) -> SettingsGroup:
    return SettingsGroup(
        name=name,
        key=key,
        path=f"/settings/{name}",
        write_method=write_method,
        value_type=value_type,
    )


ALL_SETTINGS = SettingsGroup(
    name="settings",
    key=None,
    path="/settings",
    write_method="PATCH",
    value_type=IndexSettings,
)

SETTINGS_GROUPS: dict[str, SettingsGroup] = {
    g.name: g
    for g in (
        _group("synonyms", "synonyms", "PUT", dict[str, list[str]]),
        _group("stop-words", "stopWords", "PUT", list[str]),
        _group("ranking-rules", "rankingRules", "PUT", list[str]),
        _group("filterable-attributes", "filterableAttributes", "PUT", list[str]),
        _group("sortable-attributes", "sortableAttributes", "PUT", list[str]),
        _group("distinct-attribute", "distinctAttribute", "PUT", str | None),
        _group("searchable-attributes", "searchableAttributes", "PUT", list[str]),
        _group("displayed-attributes", "displayedAttributes", "PUT", list[str]),
        _group("pagination", "pagination", "PATCH", PaginationSettings),
        _group("faceting", "faceting", "PATCH", FacetingSettings),
        _group("typo-tolerance", "typoTolerance", "PATCH", TypoToleranceSettings),
    )
}

_BY_KEY = {g.key: g for g in SETTINGS_GROUPS.values()}


def get_settings_group(name: str | SettingsGroup) -> SettingsGroup:
    """
    Resolve a group by endpoint name (stop-words), aggregate key (stopWords) or field name (stop_words).
    "settings" resolves to the whole-document entry. Raises UnknownSettingsGroup for anything else.
    """
    if isinstance(name, SettingsGroup):
        return name
    key = name.strip()
    if key == ALL_SETTINGS.name:
        return ALL_SETTINGS
    group = SETTINGS_GROUPS.get(key) or _BY_KEY.get(key) or SETTINGS_GROUPS.get(key.replace("_", "-"))
    if group is None:
        raise UnknownSettingsGroup(f"Unknown settings group: {name!r}")
    return group
