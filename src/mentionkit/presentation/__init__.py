"""Presentation layer: bridges between input widgets and the mention core."""
