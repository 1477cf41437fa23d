"""
Marketplace discovery service.

Find professionals and establishments near a location, ranked by distance
and review score, and serve a social feed with paywalled media.
"""
