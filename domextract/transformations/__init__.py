"""Transformation registry and chain execution.

Provides the named transformations a field spec can chain (node, number,
string and array operations), the registry hosts extend, and the
descriptor parser that turns "name:arg0:arg1" into a bound transformation.
"""
