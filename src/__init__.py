"""Stock Tracker backend."""
