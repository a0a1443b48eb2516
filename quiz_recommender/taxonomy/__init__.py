"""Closed vocabularies shared by models, strategies and scorers."""
