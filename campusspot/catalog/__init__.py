"""
Study-spot catalog.

Responsibilities:
- Hold the place list plus the favorite and visited id sets.
- Persist and restore them through a key-value storage collaborator.
- Filter the catalog by tab, search text, amenities and noise level.
- Attach reviews to places and keep their average rating current.
"""
