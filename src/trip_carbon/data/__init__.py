"""Packaged datasets for :mod:`trip_carbon`."""
