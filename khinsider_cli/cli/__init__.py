"""
Command-line interface: Typer commands, Rich output and the console observer.
"""
