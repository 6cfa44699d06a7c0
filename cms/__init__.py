"""
cms -- Content projection engine and media auto-fill for the CMS back office.

Subpackages:
    models            Domain entities, view models, stored-value variants.
    mapping           Projection of entities into basic / dto / display models.
    property_editors  Property editor plugins and the editor registry.
    services          Data types, users, file metadata, media persistence.
"""
