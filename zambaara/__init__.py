"""Zambaara site API: rankings, leaderboards and the admin area."""
