"""
Favorites.

Responsibilities:
- Let a signed-in user bookmark professionals.
- Keep each user's bookmarks unique and in the order they were added.
"""
