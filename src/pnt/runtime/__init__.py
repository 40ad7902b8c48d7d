"""
Dispatch runtime: values, program context, prelude and interpreter.
"""
