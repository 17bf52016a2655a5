"""Admin console API for the college admissions platform."""
