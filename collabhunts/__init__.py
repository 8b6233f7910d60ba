"""CollabHunts booking monitors package.

Hosts the scheduled delivery auto-release and dispute deadline jobs that run
against the marketplace database.
"""
