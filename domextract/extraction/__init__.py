"""Extraction interpreter.

Evaluates a configuration of field specs against a root node and returns
a plain dict of derived values.
"""
