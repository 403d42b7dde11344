"""Hearth HTTP backend."""
