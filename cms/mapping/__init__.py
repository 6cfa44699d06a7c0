"""
cms/mapping/ -- Projection of domain entities into view models.

Submodules:
    property_mapper  Single property -> basic / display record.
    tab_mapper       Properties -> ordered tabs.
    content_mapper   Whole item -> ContentItemBasic / Dto / Display.
"""

from cms.mapping.content_mapper import ContentModelMapper, UserModelMapper
from cms.mapping.property_mapper import PropertyMapper
from cms.mapping.tab_mapper import TabMapper

__all__ = ["ContentModelMapper", "PropertyMapper", "TabMapper", "UserModelMapper"]
