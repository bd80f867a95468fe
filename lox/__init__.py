"""Lox interpreter.

Basic program flow:
    1. Scanner: converts source text into a flat list of tokens (see lox/syntax/scanner.py)
    2. Parser: recursive-descent, produces a list of statement nodes and collects syntax errors
        - For the grammar, see lox/syntax/parser.py
    3. Interpreter: walks the statements against a chain of environments rooted at the globals

Any syntax error stops the pipeline before step 3. Runtime errors end the current run.
"""

__version__ = "0.1.0"
