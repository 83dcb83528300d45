"""Gym Tracker: workout history behind session authentication."""
