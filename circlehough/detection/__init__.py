"""Hough circle voting and peak extraction."""
