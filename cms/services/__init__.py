"""
cms/services/ -- Lookups and the media persistence pipeline.

Submodules:
    data_type_service  Data type definitions and their pre-values.
    user_service       Back-office users.
    file_metadata      Derives width/height/size/extension from uploads.
    media_service      In-process media store with save/create hooks.
"""
