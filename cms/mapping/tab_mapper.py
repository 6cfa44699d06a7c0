"""
cms/mapping/tab_mapper.py -- Grouping of properties into tabs.

One tab per declared property group, in the groups' sort order, followed
by the "Generic properties" tab holding everything without a group.  The
first tab is the active one.

The tab mapper does not know how a single property is projected; it is
handed a callable for that, so the same grouping serves strict and lenient
projection alike.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from cms.models.base import Property, PropertyGroup
from cms.models.editing import GENERIC_PROPERTIES_LABEL, ContentPropertyDto, Tab

logger = logging.getLogger(__name__)

GENERIC_TAB_ID = 0

ProjectProperty = Callable[[Property], ContentPropertyDto]


def _distinct_groups(groups: Iterable[PropertyGroup]) -> list[PropertyGroup]:
    """Groups ordered by sort order, first occurrence of each id kept."""
    seen: set[int] = set()
    distinct = []
    for group in groups:
        if group.id in seen:
            continue
        seen.add(group.id)
        distinct.append(group)
    # sorted() is stable, so equal sort orders keep declaration order
    return sorted(distinct, key=lambda g: g.sort_order)


def _by_sort_order(properties: Iterable[Property]) -> list[Property]:
    return sorted(properties, key=lambda p: p.property_type.sort_order)


class TabMapper:
    """Partitions an entity's properties into ordered tabs."""

    def __init__(self, generic_label: str = GENERIC_PROPERTIES_LABEL):
        self.generic_label = generic_label

    def map_tabs(
        self,
        groups: Sequence[PropertyGroup],
        properties: Sequence[Property],
        project: ProjectProperty,
    ) -> list[Tab]:
        """Build the tab list.

        Parameters
        ----------
        groups : sequence of PropertyGroup
            Groups declared on the entity's content type.
        properties : sequence of Property
            Every property on the entity.
        project : callable
            Turns one ``Property`` into its display record.

        Returns
        -------
        list[Tab]
            ``len(distinct groups) + 1`` tabs; only ``tabs[0]`` is active.
        """
        ordered_groups = _distinct_groups(groups)
        group_ids = {g.id for g in ordered_groups}

        by_group: dict[int, list[Property]] = {g.id: [] for g in ordered_groups}
        ungrouped: list[Property] = []
        for prop in properties:
            group_id = prop.property_type.property_group_id
            if group_id is None:
                ungrouped.append(prop)
            elif group_id in group_ids:
                by_group[group_id].append(prop)
            else:
                logger.warning(
                    "Property '%s' refers to undeclared group %s; showing it under '%s'",
                    prop.alias, group_id, self.generic_label,
                )
                ungrouped.append(prop)

        tabs = [
            Tab(
                id=group.id,
                label=group.name,
                alias=group.name,
                properties=[project(p) for p in _by_sort_order(by_group[group.id])],
            )
            for group in ordered_groups
        ]
        tabs.append(
            Tab(
                id=GENERIC_TAB_ID,
                label=self.generic_label,
                alias=self.generic_label,
                properties=[project(p) for p in _by_sort_order(ungrouped)],
            )
        )

        for index, tab in enumerate(tabs):
            tab.sort_order = index
            tab.is_active = index == 0
        return tabs
