# Services package init
"""
Listing API — Services Layer
============================

Service Inventory:
    - ListingService:  listing queries, reference checks, response shaping
    - PhotoService:    photo validation and publication
    - ObjectStorage (abstract): store / set_public / public_url contract
    - S3Storage:       boto3-backed implementation (production)
    - LocalStorage:    aiofiles-backed implementation (development, tests)
    - get_object_storage(): dependency selecting the configured backend

Services take the session and storage backend as arguments and can be
unit-tested without HTTP.
"""
