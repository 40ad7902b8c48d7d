"""
Compiler driver.
"""
