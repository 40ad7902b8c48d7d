"""
Compilation passes.
"""
