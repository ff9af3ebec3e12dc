"""
Graduate Application Dashboard - Flask + HTMX frontend for tracking grad school applications.

Renders the profile, education, publications and applications tables
from the backend API and suggests reach/match/safe programs.
"""
