"""Typer commands and Rich rendering."""
