"""Parsers for delimiter-formatted git output."""
