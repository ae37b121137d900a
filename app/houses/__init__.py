"""
Houses app: listings for sale or rent.

This app handles:
- House listings with a main image and up to HOUSE_MAX_SUB_IMAGES sub images
- Filtering, search and ordering of listings
- Rating a listing's owner

Related apps:
    - authentication: Owners are sellers; ratings are stored there
"""
