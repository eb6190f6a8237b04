"""Translate the string values of a JSON document, with a per-language cache."""
