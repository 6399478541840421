"""Lintgate command-line interface."""
