"""
Run as `python -m lox [-v] [-a] [script]`. See lox.cmdline for the details.
"""
from lox.cmdline import main

main()
