"""
CLI Commands Package.

Each command lives in its own module and is registered in cli/main.py.
"""
