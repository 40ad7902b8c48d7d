"""
Front end: lexer, parser, legacy dialect parser and source emitter.
"""
