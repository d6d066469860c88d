"""Deadeye Laserworks API."""
