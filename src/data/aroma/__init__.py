"""Aroma data-access bounded context.

Persists and retrieves Users, Applications, Organizations, Messages,
credentials, inboxes, follower relations, activity, media and reactions
behind the repository contracts defined in ``aroma.ports``.
"""
