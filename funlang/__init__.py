"""funlang interpreter.

Basic program flow:
    1. Lexer: turns source text into Tokens (funlang/lang/lexical.py)
    2. Parser: recursive descent over the Tokens, producing a Module of FunctionEx trees (funlang/lang/grammar.py,
       funlang/lang/tree.py)
    3. Interpreter: walks the trees against a chain of Contexts rooted at the standard library, then calls main()
       (funlang/lang/runtime.py, funlang/lang/library.py)
"""
