"""
Social feed.

Responsibilities:
- Store posts authored by professionals, some of them paywalled.
- Track which viewers are entitled to an author's paywalled media.
- Decide per viewer which media of a post is visible and which is locked.
"""
